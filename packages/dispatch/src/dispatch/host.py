"""
Host Registration

The hosting runtime keeps its own table of top-level command names and only
routes names it knows about into the dispatcher. The registry reports
every alias it binds or unbinds to a HostRegistrationSink.
"""

import logging
from abc import ABC, abstractmethod
from typing import Set

logger = logging.getLogger(__name__)


class HostRegistrationSink(ABC):
    """Adapter onto the host's command table."""

    @abstractmethod
    def bind(self, alias: str) -> None:
        """Route ``alias`` to the dispatcher."""
        pass

    @abstractmethod
    def unbind(self, alias: str) -> None:
        """Stop routing ``alias`` to the dispatcher."""
        pass

    def is_bound(self, alias: str) -> bool:
        return False


class NullHostSink(HostRegistrationSink):
    """Sink for hosts that route every command name to the dispatcher."""

    def bind(self, alias: str) -> None:
        pass

    def unbind(self, alias: str) -> None:
        pass


class CommandTable(HostRegistrationSink):
    """In-memory host command table."""

    def __init__(self):
        self._bound: Set[str] = set()

    def bind(self, alias: str) -> None:
        self._bound.add(alias.lower())
        logger.debug(f"Bound host command: {alias}")

    def unbind(self, alias: str) -> None:
        self._bound.discard(alias.lower())
        logger.debug(f"Unbound host command: {alias}")

    def is_bound(self, alias: str) -> bool:
        return alias.lower() in self._bound

    @property
    def bound(self) -> Set[str]:
        return set(self._bound)
