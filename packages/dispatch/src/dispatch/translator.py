"""
Message Translation

An optional translator maps message keys (``Messages.Command.Cooldown``)
to localised text. Callers always supply a default, used when there is no
translator or it has nothing for the key.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigError
from .sender import CommandSender

logger = logging.getLogger(__name__)


class CommandTranslator(ABC):
    """Looks up user-facing text by key."""

    @abstractmethod
    def translate_text(self, key: str, sender: Optional[CommandSender] = None) -> Optional[str]:
        pass

    def translate_list(self, key: str, sender: Optional[CommandSender] = None) -> Optional[List[str]]:
        text = self.translate_text(key, sender)
        if text is None:
            return None
        return text.splitlines()


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(_flatten(value, path))
        else:
            flat[path] = value
    return flat


class DictTranslator(CommandTranslator):
    """
    Translator backed by a mapping.

    Nested mappings are flattened into dotted keys, so
    ``{"Messages": {"Command": {"Cooldown": "..."}}}`` answers
    ``Messages.Command.Cooldown``. Keys are matched case-insensitively.
    """

    def __init__(self, messages: Optional[Dict[str, Any]] = None):
        self._messages: Dict[str, Union[str, List[str]]] = {}
        for key, value in _flatten(messages or {}).items():
            self.set(key, value)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "DictTranslator":
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load messages from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Messages file {path} must contain a mapping")
        logger.info(f"Loaded messages from: {path}")
        return cls(data)

    def set(self, key: str, value: Union[str, List[str]]) -> None:
        if isinstance(value, list):
            self._messages[key.lower()] = [str(v) for v in value]
        else:
            self._messages[key.lower()] = str(value)

    def translate_text(self, key: str, sender: Optional[CommandSender] = None) -> Optional[str]:
        value = self._messages.get(key.lower())
        if isinstance(value, list):
            return "\n".join(value)
        return value

    def translate_list(self, key: str, sender: Optional[CommandSender] = None) -> Optional[List[str]]:
        value = self._messages.get(key.lower())
        if value is None:
            return None
        if isinstance(value, list):
            return list(value)
        return value.splitlines()


class Translation:
    """Applies an optional translator with a caller-supplied default."""

    def __init__(self, translator: Optional[CommandTranslator] = None):
        self.translator = translator

    def text(self, key: str, sender: Optional[CommandSender], default: str) -> str:
        if self.translator is not None:
            translated = self.translator.translate_text(key, sender)
            if translated is not None:
                return translated
        return default

    def lines(self, key: str, sender: Optional[CommandSender], default: List[str]) -> List[str]:
        if self.translator is not None:
            translated = self.translator.translate_list(key, sender)
            if translated is not None:
                return translated
        return default
