"""Exception hierarchy for the command dispatch package.

Dispatch outcomes (unknown command, failed preconditions, help) are never
raised; they are reported through the boolean result of
``CommandsHandler.handle`` and a message sent to the sender. Exceptions are
reserved for broken command definitions and configuration.
"""


class CommandError(Exception):
    """Base exception for command package failures."""


class AliasCollisionError(CommandError, ValueError):
    """A subcommand alias collides with its parent's alias space."""


class CommandLoadError(CommandError):
    """Command definitions could not be read or validated."""


class ConfigError(CommandError, ValueError):
    """Handler configuration is invalid."""
