"""
Commands Handler

Resolves a command label and arguments to the deepest matching node, runs
the precondition pipeline and hands over to the bound executor.

Gate order (each failure sends one message and returns False):
    1. help / missing executor  -> help output, never executes
    2. cooldown                 (players only)
    3. console / player context
    4. permission               (skipped for developer commands)
    5. developer allow-list     (developer commands only)
    6. required argument count
    7. per-parameter type and length
The cooldown is applied only after the executor reports success.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .colors import colorize
from .completion import (
    CompleterRegistry,
    PlayerCompleter,
    SubCommandCompleter,
    TabCompleter,
)
from .config import HandlerConfig
from .constants import (
    HELP_ARGUMENTS,
    MESSAGE_CONSOLE,
    MESSAGE_COOLDOWN,
    MESSAGE_DEVELOPER,
    MESSAGE_HELP_HEADER,
    MESSAGE_INVALID_LENGTH,
    MESSAGE_INVALID_PERMISSION,
    MESSAGE_INVALID_TYPE,
    MESSAGE_PLAYER,
    MESSAGE_USAGE_PREFIX,
    PLAYER_COMPLETER,
    SUB_COMMAND_COMPLETER,
)
from .cooldown import CooldownHandler
from .execution import CommandContext, CommandExecution, ExecutorFunction, ExecutorRegistry
from .help import help_line, parse_page, subcommand_help
from .loader import CommandLoader
from .node import CommandNode
from .parameters import ParameterTypeRegistry, check_argument, default_parameter_types
from .permissions import AllowAllPermissions, CommandPermissionHandler, SenderPermissions
from .registry import CommandRegistry
from .resolver import CommandSearch
from .sender import CommandSender
from .translator import CommandTranslator, Translation

logger = logging.getLogger(__name__)


def split_command(line: str) -> Tuple[str, List[str]]:
    """Split a raw input line into (label, arguments). A leading slash is dropped."""
    tokens = line.strip().split()
    if not tokens:
        return "", []
    label = tokens[0][1:] if tokens[0].startswith("/") else tokens[0]
    return label, tokens[1:]


class CommandsHandler:
    """
    Dispatch engine for registered commands.

    Construct one per host and pass it to whatever needs to dispatch;
    there is no global instance.
    """

    def __init__(
        self,
        registry: Optional[CommandRegistry] = None,
        loader: Optional[CommandLoader] = None,
        config: Optional[HandlerConfig] = None,
        permission_handler: Optional[CommandPermissionHandler] = None,
        cooldown_handler: Optional[CooldownHandler] = None,
        translator: Optional[CommandTranslator] = None,
        parameter_types: Optional[ParameterTypeRegistry] = None,
        players: Optional[Callable[[], Iterable[str]]] = None,
    ):
        self.config = config or HandlerConfig()
        self.registry = registry if registry is not None else CommandRegistry()
        self.loader = loader

        if permission_handler is None:
            permission_handler = AllowAllPermissions() if self.config.testing else SenderPermissions()

        self.executors = ExecutorRegistry(permission_handler)
        self.completers = CompleterRegistry()
        self.cooldown_handler = cooldown_handler
        self.translation = Translation(translator)
        self.parameter_types = parameter_types or default_parameter_types()

        self.developers: List[str] = list(self.config.developers)
        self.help_length = self.config.help_length
        self._players = players

    # =========================================================================
    # Wiring
    # =========================================================================

    @property
    def permission_handler(self) -> CommandPermissionHandler:
        return self.executors.permission_handler

    @permission_handler.setter
    def permission_handler(self, handler: CommandPermissionHandler) -> None:
        self.executors.set_permission_handler(handler)

    @property
    def translator(self) -> Optional[CommandTranslator]:
        return self.translation.translator

    @translator.setter
    def translator(self, translator: Optional[CommandTranslator]) -> None:
        self.translation.translator = translator

    def load(self) -> None:
        """Register the default completers, then load command definitions."""
        self.completers.register(PLAYER_COMPLETER, PlayerCompleter(self._players))
        self.completers.register(SUB_COMMAND_COMPLETER, SubCommandCompleter())

        if self.loader is not None:
            self.loader.load(self.registry)

        logger.info(
            f"Commands handler loaded: {len(self.registry)} commands, "
            f"{len(self.executors)} executors"
        )

    def add_executor(self, key: str, execution: Union[CommandExecution, ExecutorFunction]) -> CommandExecution:
        return self.executors.register(key, execution)

    def add_completer(self, key: str, completer: TabCompleter) -> None:
        self.completers.register(key, completer)

    def is_developer(self, sender: CommandSender) -> bool:
        if not sender.is_player:
            return False
        return sender.unique_id in self.developers

    # =========================================================================
    # Tab Completion
    # =========================================================================

    def tab(self, sender: CommandSender, label: str, arguments: Sequence[str]) -> List[str]:
        """Completion candidates for the last (partial) argument. Side-effect free."""
        search = self.registry.search(label, arguments)
        if search is None or search.node is None:
            return []

        node = search.node
        argument = search.last_argument

        if search.arguments:
            completer = self.completers.get(node.completer(len(search.arguments) - 1))
            if completer is not None:
                return completer.complete(sender, search, argument)

        completer = self.completers.get(SUB_COMMAND_COMPLETER) or SubCommandCompleter()
        return completer.complete(sender, search, argument)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def handle_line(self, sender: CommandSender, line: str) -> bool:
        label, arguments = split_command(line)
        if not label:
            return False
        return self.handle(sender, label, arguments)

    def handle(self, sender: CommandSender, label: str, arguments: Sequence[str]) -> bool:
        """
        Dispatch a command.

        Returns True only if the executor ran and reported success. Unknown
        commands return False without sending anything.
        """
        search = self.registry.search(label, arguments)
        if search is None or search.node is None:
            return False

        node = search.node
        arguments = search.arguments
        execution = self.executors.get(node.executor)

        if (arguments and arguments[0].lower() in HELP_ARGUMENTS) or execution is None:
            self._send_help(sender, node, parse_page(arguments))
            return False

        if not self._check_preconditions(sender, node, execution, arguments):
            return False

        context = CommandContext(label=label, node=node, search=search)
        completed = bool(execution.execute(sender, context, list(arguments)))

        if completed and sender.is_player and node.cooldown > 0 and self.cooldown_handler is not None:
            self.cooldown_handler.add_cooldown(sender.unique_id, node.name, node.cooldown)

        logger.debug(f"{sender.name} ran {node.qualified_name}: {'ok' if completed else 'failed'}")
        return completed

    def _check_preconditions(
        self,
        sender: CommandSender,
        node: CommandNode,
        execution: CommandExecution,
        arguments: List[str],
    ) -> bool:
        messages = self.config.messages
        player = sender.is_player

        if player and self.cooldown_handler is not None:
            if self.cooldown_handler.has_cooldown(sender.unique_id, node.name):
                return self._deny(sender, node, "cooldown", MESSAGE_COOLDOWN, messages.cooldown)

        if not player and not node.console:
            return self._deny(sender, node, "console", MESSAGE_CONSOLE, messages.console)

        if player and not node.player:
            return self._deny(sender, node, "player", MESSAGE_PLAYER, messages.player)

        if not node.developer and not execution.can_execute(node, sender):
            return self._deny(
                sender, node, "permission", MESSAGE_INVALID_PERMISSION, messages.invalid_permission
            )

        if node.developer and not self.is_developer(sender):
            return self._deny(sender, node, "developer", MESSAGE_DEVELOPER, messages.developer)

        if node.required_arguments > len(arguments):
            return self._deny(
                sender,
                node,
                "arguments",
                MESSAGE_USAGE_PREFIX + node.qualified_name,
                help_line(node),
            )

        for index, value in enumerate(arguments):
            parameter = node.parameter(index)
            if parameter is None:
                continue

            check = check_argument(self.parameter_types, parameter, value)
            if check.ok:
                continue

            if not check.valid_type:
                key, default = MESSAGE_INVALID_TYPE, messages.invalid_type
            else:
                key, default = MESSAGE_INVALID_LENGTH, messages.invalid_length

            text = self.translation.text(key, sender, default)
            text = text.replace("$parameter_type", parameter.type).replace("$parameter", parameter.name)
            sender.send_message(self._format(text))
            logger.debug(f"{sender.name} denied {node.qualified_name}: {'; '.join(check.errors)}")
            return False

        return True

    def _deny(self, sender: CommandSender, node: CommandNode, reason: str, key: str, default: str) -> bool:
        sender.send_message(self._format(self.translation.text(key, sender, default)))
        logger.debug(f"{sender.name} denied {node.qualified_name}: {reason}")
        return False

    # =========================================================================
    # Help
    # =========================================================================

    def _send_help(self, sender: CommandSender, node: CommandNode, page: int) -> None:
        if node.has_subs:
            header = self.translation.text(MESSAGE_HELP_HEADER, sender, self.config.messages.help_header)
            lines = subcommand_help(node, page, self.help_length, header)
            sender.send_message([self._format(line) for line in lines])
            return
        sender.send_message(self._format(help_line(node)))

    def get_help(self, label: str, page: int = 1) -> List[str]:
        """Help lines for a command without dispatching it."""
        node = self.registry.find(label)
        if node is None:
            return []
        if node.has_subs:
            header = self.translation.text(MESSAGE_HELP_HEADER, None, self.config.messages.help_header)
            return [self._format(line) for line in subcommand_help(node, page, self.help_length, header)]
        return [self._format(help_line(node))]

    def _format(self, text: str) -> str:
        return colorize(text, theme=self.config.theme, enabled=self.config.colors)

    def search(self, label: str, arguments: Sequence[str]) -> Optional[CommandSearch]:
        return self.registry.search(label, arguments)
