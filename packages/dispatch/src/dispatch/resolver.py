"""
Subcommand Resolver

Walks an argument vector down a command tree. Each leading argument that
matches a child alias (case-insensitive) is consumed as a hop; the walk
stops at the first argument that matches nothing. There is no
backtracking, so an argument that happens to equal a child alias is always
treated as a subcommand rather than as data.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from .node import CommandNode


@dataclass
class CommandSearch:
    """Result of resolving a label and arguments against the command tree."""

    node: Optional["CommandNode"]
    arguments: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.node is not None

    @property
    def last_argument(self) -> str:
        return self.arguments[-1] if self.arguments else ""


def resolve(node: "CommandNode", arguments: Sequence[str]) -> CommandSearch:
    """Return the deepest node reached from ``node`` and the unconsumed arguments."""
    current = node
    remaining = list(arguments)

    while remaining:
        child = current.find_sub(remaining[0])
        if child is None:
            break
        current = child
        remaining = remaining[1:]

    return CommandSearch(node=current, arguments=remaining)
