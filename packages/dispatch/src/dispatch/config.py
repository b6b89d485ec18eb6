"""
Handler Configuration

Settings for CommandsHandler, built from environment variables or a YAML
file. Environment variables:

    COMMANDS_DEVELOPERS   comma separated developer UUIDs
    COMMANDS_HELP_LENGTH  subcommands per help page
    COMMANDS_TESTING      "1"/"true" grants every permission
    COMMANDS_COLORS       "0"/"false" strips color codes from output
    COMMANDS_LOG_LEVEL    level used by configure_logging()
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .constants import DEFAULT_HELP_LENGTH
from .errors import ConfigError

logger = logging.getLogger(__name__)


class MessageSettings(BaseModel):
    """Default user-facing messages, used when no translation exists.

    ``invalid_type`` and ``invalid_length`` substitute ``$parameter`` and
    ``$parameter_type``.
    """

    cooldown: str = "{errorYou must wait before using this command again.{x"
    console: str = "{errorThis command can't be used from the console.{x"
    player: str = "{errorThis command can't be used by players.{x"
    invalid_permission: str = "{errorYou don't have permission to use this command.{x"
    developer: str = "{errorThis command is restricted to developers.{x"
    invalid_type: str = "{errorInvalid value for $parameter, expected $parameter_type.{x"
    invalid_length: str = "{errorValue for $parameter is too long.{x"
    help_header: str = "{headerHelp for $command (page $page/$pages){x"


class HandlerConfig(BaseModel):
    """Configuration for a CommandsHandler."""

    developers: List[str] = Field(default_factory=list)
    help_length: int = Field(default=DEFAULT_HELP_LENGTH, ge=1)
    testing: bool = False
    colors: bool = True
    theme: str = "classic"
    messages: MessageSettings = Field(default_factory=MessageSettings)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_handler_config() -> HandlerConfig:
    """Build handler config from environment variables."""
    developers = [
        d.strip() for d in os.environ.get("COMMANDS_DEVELOPERS", "").split(",") if d.strip()
    ]
    try:
        return HandlerConfig(
            developers=developers,
            help_length=int(os.environ.get("COMMANDS_HELP_LENGTH", str(DEFAULT_HELP_LENGTH))),
            testing=_env_flag("COMMANDS_TESTING", False),
            colors=_env_flag("COMMANDS_COLORS", True),
        )
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid command handler environment: {e}") from e


def load_handler_config(path: Union[str, Path]) -> HandlerConfig:
    """Load handler config from a YAML file."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read handler config {path}: {e}") from e

    try:
        config = HandlerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid handler config {path}: {e}") from e

    logger.info(f"Loaded handler config from: {path}")
    return config


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the package's default logging setup."""
    level = level or os.environ.get("COMMANDS_LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
