"""
Command Nodes

A CommandNode is one command or subcommand in the resolution tree. Nodes
are built by a loader, registered with the CommandRegistry and treated as
immutable while commands are being dispatched.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .errors import AliasCollisionError
from .parameters import CommandParameter
from .resolver import CommandSearch, resolve

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CommandNode:
    """Definition of a command and its subcommands."""

    name: str
    aliases: List[str] = field(default_factory=list)
    description: str = ""
    syntax: str = ""
    permission: str = ""
    executor: str = ""

    # Who may run it
    console: bool = True
    player: bool = True
    developer: bool = False  # Restricted to the developer allow-list

    required_arguments: int = 0
    cooldown: int = 0  # Seconds, applied after a successful execution

    parameters: List[CommandParameter] = field(default_factory=list)
    completers: Dict[int, str] = field(default_factory=dict)  # argument index -> completer key
    sub: Dict[str, "CommandNode"] = field(default_factory=dict)  # alias -> child

    parent: Optional["CommandNode"] = field(default=None, repr=False)

    def __post_init__(self):
        if self.required_arguments < 0:
            raise ValueError(f"required_arguments must be >= 0 for {self.name}")
        if self.cooldown < 0:
            raise ValueError(f"cooldown must be >= 0 for {self.name}")

        aliases: List[str] = []
        for alias in [self.name, *self.aliases]:
            alias = alias.lower()
            if alias not in aliases:
                aliases.append(alias)
        self.aliases = aliases

        children = list(self.sub.values())
        self.sub = {}
        for child in children:
            if child not in self.sub.values():
                self.add_sub(child)

    # =========================================================================
    # Tree Structure
    # =========================================================================

    def matches(self, alias: str) -> bool:
        return alias.lower() in self.aliases

    def add_sub(self, child: "CommandNode") -> "CommandNode":
        """Attach a subcommand under every one of its aliases."""
        for alias in child.aliases:
            if alias in self.aliases:
                raise AliasCollisionError(
                    f"Subcommand alias '{alias}' collides with command '{self.name}'"
                )
            existing = self.sub.get(alias)
            if existing is not None and existing is not child:
                raise AliasCollisionError(
                    f"Subcommand alias '{alias}' is already used by "
                    f"'{existing.name}' under '{self.name}'"
                )

        for alias in child.aliases:
            self.sub[alias] = child
        child.parent = self

        logger.debug(f"Added subcommand {child.name} to {self.name}")
        return child

    def remove_sub(self, name: str) -> Optional["CommandNode"]:
        """Detach the subcommand reached by ``name`` along with all its aliases."""
        child = self.find_sub(name)
        if child is None:
            return None

        self.sub = {alias: node for alias, node in self.sub.items() if node is not child}
        child.parent = None
        return child

    def find_sub(self, alias: str) -> Optional["CommandNode"]:
        return self.sub.get(alias.lower())

    def unique_subs(self) -> List["CommandNode"]:
        """Distinct children, sorted by name."""
        seen: List[CommandNode] = []
        for child in self.sub.values():
            if child not in seen:
                seen.append(child)
        return sorted(seen, key=lambda c: c.name.lower())

    @property
    def has_subs(self) -> bool:
        return bool(self.sub)

    def find(self, name: str) -> "CommandNode":
        """
        Resolve the node a registry alias actually refers to.

        A root registered under an alias group may hand that alias to one of
        its descendants, so a group like ["plugin", "reload"] can route
        "reload" straight to the "reload" subcommand. Any other name leaves
        the root itself as the target.
        """
        if self.matches(name):
            return self

        child = self.find_sub(name)
        if child is not None:
            return child.find(name)
        return self

    def resolve(self, arguments: Sequence[str]) -> CommandSearch:
        return resolve(self, arguments)

    # =========================================================================
    # Introspection
    # =========================================================================

    def completer(self, index: int) -> Optional[str]:
        """Completer key bound to an argument position, if any."""
        if index in self.completers:
            return self.completers[index]
        if 0 <= index < len(self.parameters):
            return self.parameters[index].completer
        return None

    def parameter(self, index: int) -> Optional[CommandParameter]:
        if 0 <= index < len(self.parameters):
            return self.parameters[index]
        return None

    def command_path(self) -> List[str]:
        """Names from the root command down to this node."""
        path: List[str] = []
        node: Optional[CommandNode] = self
        while node is not None:
            path.append(node.name)
            node = node.parent
        return list(reversed(path))

    @property
    def qualified_name(self) -> str:
        """Dotted path used as a translation key, e.g. ``tp.here``."""
        return ".".join(self.command_path())

    def walk(self):
        """Yield this node and every distinct descendant, depth first."""
        yield self
        for child in self.unique_subs():
            yield from child.walk()
