"""
Command Execution

Executors are registered by key; command nodes name the key they run.
Executors can be CommandExecution subclasses or plain functions:

    executors = ExecutorRegistry()

    @executors.executor("tp_here")
    def tp_here(sender, context, arguments) -> bool:
        sender.send_message(f"Teleporting {arguments[0]} blocks")
        return True
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from .node import CommandNode
from .permissions import CommandPermissionHandler, SenderPermissions
from .resolver import CommandSearch
from .sender import CommandSender

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """What the dispatcher resolved before handing over to an executor."""

    label: str
    node: CommandNode
    search: CommandSearch


ExecutorFunction = Callable[[CommandSender, CommandContext, List[str]], bool]


class CommandExecution(ABC):
    """Runs a command once every precondition has passed."""

    def __init__(self, permission_handler: Optional[CommandPermissionHandler] = None):
        self.permission_handler = permission_handler

    def can_execute(self, node: CommandNode, sender: CommandSender) -> bool:
        """Permission gate. Defaults to the injected permission handler."""
        handler = self.permission_handler or SenderPermissions()
        return handler.has_permission(node, sender)

    @abstractmethod
    def execute(self, sender: CommandSender, context: CommandContext, arguments: List[str]) -> bool:
        """Run the command. Returns True if it completed successfully."""
        pass


class FunctionExecution(CommandExecution):
    """Adapts a plain function to CommandExecution."""

    def __init__(
        self,
        func: ExecutorFunction,
        permission_handler: Optional[CommandPermissionHandler] = None,
        check: Optional[Callable[[CommandNode, CommandSender], bool]] = None,
    ):
        super().__init__(permission_handler)
        self.func = func
        self.check = check

    def can_execute(self, node: CommandNode, sender: CommandSender) -> bool:
        if self.check is not None:
            return self.check(node, sender)
        return super().can_execute(node, sender)

    def execute(self, sender: CommandSender, context: CommandContext, arguments: List[str]) -> bool:
        return bool(self.func(sender, context, arguments))

    def __repr__(self) -> str:
        return f"FunctionExecution({getattr(self.func, '__name__', self.func)!r})"


class ExecutorRegistry:
    """
    Executors keyed by name.

    Executors registered without their own permission handler inherit the
    registry's.
    """

    def __init__(self, permission_handler: Optional[CommandPermissionHandler] = None):
        self.permission_handler = permission_handler or SenderPermissions()
        self._executors: Dict[str, CommandExecution] = {}

    def register(self, key: str, execution: Union[CommandExecution, ExecutorFunction]) -> CommandExecution:
        if not isinstance(execution, CommandExecution):
            execution = FunctionExecution(execution)
        if execution.permission_handler is None:
            execution.permission_handler = self.permission_handler

        self._executors[key] = execution
        logger.debug(f"Registered executor: {key}")
        return execution

    def set_permission_handler(self, permission_handler: CommandPermissionHandler) -> None:
        """Swap the default handler, including on executors that inherited it."""
        previous = self.permission_handler
        self.permission_handler = permission_handler
        for execution in self._executors.values():
            if execution.permission_handler is previous:
                execution.permission_handler = permission_handler

    def unregister(self, key: str) -> bool:
        return self._executors.pop(key, None) is not None

    def get(self, key: str) -> Optional[CommandExecution]:
        return self._executors.get(key)

    def keys(self) -> List[str]:
        return list(self._executors)

    def __contains__(self, key: str) -> bool:
        return key in self._executors

    def __len__(self) -> int:
        return len(self._executors)

    def executor(self, key: str, check: Optional[Callable[[CommandNode, CommandSender], bool]] = None):
        """Decorator registering a function as the executor for ``key``."""

        def decorator(func: ExecutorFunction) -> ExecutorFunction:
            self.register(key, FunctionExecution(func, check=check))
            return func

        return decorator
