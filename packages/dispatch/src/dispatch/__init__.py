"""
Command Dispatch

Resolves textual command invocations against a tree of nested subcommands,
enforces execution preconditions and runs registered executors.

Architecture:
    CommandRegistry (alias groups -> root CommandNode)
        │ search(label, args)
        ▼
    Resolver (greedy walk to the deepest subcommand)
        │ CommandSearch(node, remaining args)
        ▼
    CommandsHandler
        │ help → cooldown → context → permission → developer
        │ → argument count → parameter types
        ▼
    ExecutorRegistry[node.executor].execute(...)

Tab completion follows the same resolution path and then asks the
CompleterRegistry, skipping the precondition pipeline entirely.
"""

import logging

logger = logging.getLogger(__name__)

from .errors import (  # noqa: E402
    AliasCollisionError,
    CommandError,
    CommandLoadError,
    ConfigError,
)
from .sender import (  # noqa: E402
    CommandSender,
    ConsoleSender,
    MessageCollector,
    PlayerSender,
)
from .parameters import (  # noqa: E402
    CommandParameter,
    ParameterType,
    ParameterTypeRegistry,
    default_parameter_types,
)
from .resolver import CommandSearch, resolve  # noqa: E402
from .node import CommandNode  # noqa: E402
from .host import CommandTable, HostRegistrationSink, NullHostSink  # noqa: E402
from .registry import CommandRegistry  # noqa: E402
from .permissions import (  # noqa: E402
    AllowAllPermissions,
    CommandPermissionHandler,
    SenderPermissions,
)
from .execution import (  # noqa: E402
    CommandContext,
    CommandExecution,
    ExecutorRegistry,
    FunctionExecution,
)
from .cooldown import (  # noqa: E402
    CooldownHandler,
    MemoryCooldownHandler,
    RayCooldownHandler,
)
from .completion import (  # noqa: E402
    CompleterRegistry,
    ListCompleter,
    PlayerCompleter,
    SubCommandCompleter,
    TabCompleter,
)
from .translator import CommandTranslator, DictTranslator, Translation  # noqa: E402
from .config import (  # noqa: E402
    HandlerConfig,
    MessageSettings,
    configure_logging,
    get_handler_config,
    load_handler_config,
)
from .loader import CommandLoader, DictCommandLoader, YamlCommandLoader  # noqa: E402
from .handler import CommandsHandler, split_command  # noqa: E402

__all__ = [
    # Errors
    "AliasCollisionError",
    "CommandError",
    "CommandLoadError",
    "ConfigError",
    # Senders
    "CommandSender",
    "ConsoleSender",
    "MessageCollector",
    "PlayerSender",
    # Parameters
    "CommandParameter",
    "ParameterType",
    "ParameterTypeRegistry",
    "default_parameter_types",
    # Tree and resolution
    "CommandNode",
    "CommandSearch",
    "resolve",
    "CommandRegistry",
    # Host registration
    "CommandTable",
    "HostRegistrationSink",
    "NullHostSink",
    # Capabilities
    "AllowAllPermissions",
    "CommandPermissionHandler",
    "SenderPermissions",
    "CommandContext",
    "CommandExecution",
    "ExecutorRegistry",
    "FunctionExecution",
    "CooldownHandler",
    "MemoryCooldownHandler",
    "RayCooldownHandler",
    "CompleterRegistry",
    "ListCompleter",
    "PlayerCompleter",
    "SubCommandCompleter",
    "TabCompleter",
    "CommandTranslator",
    "DictTranslator",
    "Translation",
    # Configuration and loading
    "HandlerConfig",
    "MessageSettings",
    "configure_logging",
    "get_handler_config",
    "load_handler_config",
    "CommandLoader",
    "DictCommandLoader",
    "YamlCommandLoader",
    # Dispatch
    "CommandsHandler",
    "split_command",
]
