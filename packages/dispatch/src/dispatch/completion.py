"""
Tab Completion

Completers produce candidate strings for the argument currently being
typed. Completion never runs preconditions or executors.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional

from .resolver import CommandSearch
from .sender import CommandSender

logger = logging.getLogger(__name__)


class TabCompleter(ABC):
    """Produces completion candidates for a partial argument."""

    @abstractmethod
    def complete(self, sender: CommandSender, search: CommandSearch, argument: str) -> List[str]:
        pass


def _starts_with(candidates: Iterable[str], prefix: str) -> List[str]:
    prefix = prefix.lower()
    return [c for c in candidates if c.lower().startswith(prefix)]


class SubCommandCompleter(TabCompleter):
    """Names of the resolved node's children with an alias starting with the argument."""

    def complete(self, sender: CommandSender, search: CommandSearch, argument: str) -> List[str]:
        if search.node is None:
            return []
        prefix = argument.lower()
        return sorted({child.name for alias, child in search.node.sub.items() if alias.startswith(prefix)})


class PlayerCompleter(TabCompleter):
    """Names of online players that start with the argument."""

    def __init__(self, players: Optional[Callable[[], Iterable[str]]] = None):
        self._players = players or (lambda: [])

    def complete(self, sender: CommandSender, search: CommandSearch, argument: str) -> List[str]:
        return sorted(_starts_with(self._players(), argument), key=str.lower)


class ListCompleter(TabCompleter):
    """Fixed candidate list, e.g. for enumerated token parameters."""

    def __init__(self, values: Iterable[str]):
        self.values = list(values)

    def complete(self, sender: CommandSender, search: CommandSearch, argument: str) -> List[str]:
        return _starts_with(self.values, argument)


class CompleterRegistry:
    """Completers keyed by name."""

    def __init__(self):
        self._completers: Dict[str, TabCompleter] = {}

    def register(self, key: str, completer: TabCompleter) -> None:
        self._completers[key] = completer
        logger.debug(f"Registered completer: {key}")

    def unregister(self, key: str) -> bool:
        return self._completers.pop(key, None) is not None

    def get(self, key: Optional[str]) -> Optional[TabCompleter]:
        if key is None:
            return None
        return self._completers.get(key)

    def keys(self) -> List[str]:
        return list(self._completers)

    def __contains__(self, key: str) -> bool:
        return key in self._completers
