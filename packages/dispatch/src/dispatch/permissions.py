"""
Permission Handlers

Decide whether a sender may run a command node. The default executor
``can_execute`` delegates here.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .sender import CommandSender

if TYPE_CHECKING:
    from .node import CommandNode


class CommandPermissionHandler(ABC):
    """Yes/no permission decision for a (node, sender) pair."""

    @abstractmethod
    def has_permission(self, node: "CommandNode", sender: CommandSender) -> bool:
        pass


class AllowAllPermissions(CommandPermissionHandler):
    """Grants everything. Used when the handler runs in testing mode."""

    def has_permission(self, node: "CommandNode", sender: CommandSender) -> bool:
        return True


class SenderPermissions(CommandPermissionHandler):
    """Checks the node's permission string against the sender's grants.

    Nodes without a permission string are open to everyone.
    """

    def has_permission(self, node: "CommandNode", sender: CommandSender) -> bool:
        if not node.permission:
            return True
        return sender.has_permission(node.permission)
