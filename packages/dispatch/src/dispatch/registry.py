"""
Command Registry

Maps alias groups to root command nodes. Every alias is unique across the
registry: registering a group that reuses an alias takes that alias away
from whichever group held it before.

The alias map is replaced wholesale on every mutation, so a lookup in
progress always sees one consistent snapshot even if a reload runs
alongside it.
"""

import logging
import threading
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .host import HostRegistrationSink, NullHostSink
from .node import CommandNode
from .resolver import CommandSearch

logger = logging.getLogger(__name__)


AliasGroup = Tuple[str, ...]


def _normalise_group(aliases: Iterable[str]) -> AliasGroup:
    group: List[str] = []
    for alias in aliases:
        alias = alias.strip().lower()
        if alias and alias not in group:
            group.append(alias)
    return tuple(group)


class CommandRegistry:
    """
    Registry of top-level commands.

    Aliases are bound into the host command table as they are registered;
    failures there are logged and otherwise ignored, leaving the in-memory
    registry authoritative.
    """

    def __init__(self, host: Optional[HostRegistrationSink] = None):
        self._commands: Dict[AliasGroup, CommandNode] = {}
        self._host = host or NullHostSink()
        self._write_lock = threading.Lock()

    @property
    def host(self) -> HostRegistrationSink:
        return self._host

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, aliases: Sequence[str], node: CommandNode) -> None:
        """Register ``node`` under every alias in the group, replacing prior bindings."""
        group = _normalise_group(aliases)
        if not group:
            raise ValueError(f"Command {node.name} needs at least one alias")

        with self._write_lock:
            commands: Dict[AliasGroup, CommandNode] = {}
            for existing_group, existing in self._commands.items():
                remaining = tuple(a for a in existing_group if a not in group)
                if len(remaining) != len(existing_group):
                    logger.info(
                        f"Command {node.name} takes over aliases from {existing.name}: "
                        f"{', '.join(a for a in existing_group if a in group)}"
                    )
                if remaining:
                    commands[remaining] = existing
            commands[group] = node
            self._commands = commands

        for alias in group:
            self._bind(alias)

        logger.debug(f"Registered command: {node.name} ({', '.join(group)})")

    def register_node(self, node: CommandNode) -> None:
        """Register a root node under its own aliases."""
        self.register(node.aliases, node)

    def unregister(self, aliases: Iterable[str]) -> List[str]:
        """Remove aliases from the registry. Unknown aliases are ignored.

        Returns the aliases that were actually removed.
        """
        targets = _normalise_group(aliases)
        removed: List[str] = []

        with self._write_lock:
            commands: Dict[AliasGroup, CommandNode] = {}
            for group, node in self._commands.items():
                remaining = tuple(a for a in group if a not in targets)
                removed.extend(a for a in group if a in targets)
                if remaining:
                    commands[remaining] = node
            self._commands = commands

        for alias in removed:
            self._unbind(alias)

        if removed:
            logger.debug(f"Unregistered commands: {', '.join(removed)}")
        return removed

    def clear(self) -> None:
        """Remove every command."""
        self.unregister(self.aliases())

    def _bind(self, alias: str) -> None:
        try:
            if self._host.is_bound(alias):
                self._host.unbind(alias)
            self._host.bind(alias)
        except Exception as e:
            logger.warning(f"Failed to bind host command {alias}: {e}")

    def _unbind(self, alias: str) -> None:
        try:
            self._host.unbind(alias)
        except Exception as e:
            logger.warning(f"Failed to unbind host command {alias}: {e}")

    # =========================================================================
    # Lookup
    # =========================================================================

    def find(self, name: str) -> Optional[CommandNode]:
        """Find the node registered under ``name`` (case-insensitive)."""
        name = name.lower()
        for group, node in self._commands.items():
            if name in group:
                return node.find(name)
        return None

    def search(self, name: str, arguments: Sequence[str]) -> Optional[CommandSearch]:
        """Find ``name`` and walk ``arguments`` down to the deepest subcommand."""
        node = self.find(name)
        if node is None:
            return None
        return node.resolve(arguments)

    def get_all(self) -> Dict[AliasGroup, CommandNode]:
        return dict(self._commands)

    def aliases(self) -> List[str]:
        return [alias for group in self._commands for alias in group]

    def group_of(self, name: str) -> Optional[AliasGroup]:
        name = name.lower()
        for group in self._commands:
            if name in group:
                return group
        return None

    def __contains__(self, name: str) -> bool:
        return self.group_of(name) is not None

    def __len__(self) -> int:
        return len(self._commands)
