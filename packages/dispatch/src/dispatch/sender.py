"""
Command Senders

An actor issuing a command. Players carry a persistent identity (a UUID);
the console and other non-player actors do not.
"""

import uuid
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set, Union


class CommandSender(ABC):
    """Base class for anything that can issue commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the sender."""
        ...

    @property
    def unique_id(self) -> Optional[str]:
        """Persistent identity, or None for senders without one."""
        return None

    @property
    def is_player(self) -> bool:
        return self.unique_id is not None

    @abstractmethod
    def send_message(self, message: Union[str, List[str]]) -> None:
        """Deliver one message (or several lines) to the sender."""
        ...

    def has_permission(self, permission: str) -> bool:
        return False


class MessageCollector(CommandSender):
    """Sender that keeps every message it receives, in order."""

    def __init__(self):
        self.messages: List[str] = []

    def send_message(self, message: Union[str, List[str]]) -> None:
        if isinstance(message, str):
            self.messages.append(message)
        else:
            self.messages.extend(message)

    @property
    def last_message(self) -> Optional[str]:
        return self.messages[-1] if self.messages else None

    def clear_messages(self) -> None:
        self.messages.clear()


class ConsoleSender(MessageCollector):
    """The server console. Has every permission and no persistent identity."""

    @property
    def name(self) -> str:
        return "CONSOLE"

    def has_permission(self, permission: str) -> bool:
        return True


class PlayerSender(MessageCollector):
    """A player with a UUID and a set of granted permission nodes.

    Grants ending in ``.*`` cover every permission below that prefix, and a
    bare ``*`` covers everything.
    """

    def __init__(
        self,
        name: str,
        unique_id: Optional[Union[str, uuid.UUID]] = None,
        permissions: Optional[Iterable[str]] = None,
    ):
        super().__init__()
        self._name = name
        self._unique_id = str(uuid.uuid4() if unique_id is None else unique_id)
        self.permissions: Set[str] = {p.lower() for p in (permissions or [])}

    @property
    def name(self) -> str:
        return self._name

    @property
    def unique_id(self) -> Optional[str]:
        return self._unique_id

    def grant(self, permission: str) -> None:
        self.permissions.add(permission.lower())

    def revoke(self, permission: str) -> None:
        self.permissions.discard(permission.lower())

    def has_permission(self, permission: str) -> bool:
        permission = permission.lower()
        if "*" in self.permissions or permission in self.permissions:
            return True

        parts = permission.split(".")
        for i in range(1, len(parts)):
            if ".".join(parts[:i]) + ".*" in self.permissions:
                return True
        return False

    def __repr__(self) -> str:
        return f"PlayerSender(name={self._name!r}, unique_id={self._unique_id!r})"
