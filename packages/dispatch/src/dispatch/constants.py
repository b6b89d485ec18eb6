"""Shared constants for the command dispatch package."""

# Ray actor naming
ACTOR_NAMESPACE = "commands"
COMMAND_SERVICE_ACTOR = "command_service"
COOLDOWN_ACTOR = "command_cooldowns"

# Tokens that route a resolved command to its help output
HELP_ARGUMENTS = ("help", "?")

# Default completer keys registered by CommandsHandler.load()
SUB_COMMAND_COMPLETER = "sub_command"
PLAYER_COMPLETER = "player"

DEFAULT_HELP_LENGTH = 5

# Parameter type whose max_length is enforced
BOUNDED_TEXT_TYPE = "string"

# Translation keys
MESSAGE_COOLDOWN = "Messages.Command.Cooldown"
MESSAGE_CONSOLE = "Messages.Command.Console"
MESSAGE_PLAYER = "Messages.Command.Player"
MESSAGE_INVALID_PERMISSION = "Messages.Command.InvalidPermission"
MESSAGE_DEVELOPER = "Messages.Command.Developer"
MESSAGE_INVALID_TYPE = "Messages.Parameter.InvalidType"
MESSAGE_INVALID_LENGTH = "Messages.Parameter.InvalidLength"
MESSAGE_USAGE_PREFIX = "Messages.Command."
MESSAGE_HELP_HEADER = "Messages.Help.Header"
