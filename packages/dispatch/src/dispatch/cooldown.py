"""
Command Cooldowns

Per-player, per-command suppression windows applied after a command runs
successfully.

Two backends:
- MemoryCooldownHandler: process-local table
- RayCooldownHandler: proxy onto a CooldownActor shared across processes
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import ray
from ray.actor import ActorHandle

from .constants import ACTOR_NAMESPACE, COOLDOWN_ACTOR

logger = logging.getLogger(__name__)


class CooldownHandler(ABC):
    """Tracks cooldown expiry per (unique id, command name)."""

    @abstractmethod
    def has_cooldown(self, unique_id: str, command: str) -> bool:
        pass

    @abstractmethod
    def add_cooldown(self, unique_id: str, command: str, seconds: int) -> None:
        pass

    def remaining(self, unique_id: str, command: str) -> float:
        """Seconds left on a cooldown, 0 when none is active."""
        return 0.0

    def clear(self, unique_id: Optional[str] = None) -> None:
        """Drop cooldowns for one player, or for everyone."""
        pass


@dataclass
class CooldownEntry:
    """An active cooldown."""

    expires_at: float
    seconds: int


class MemoryCooldownHandler(CooldownHandler):
    """In-memory cooldown table. Expired entries are dropped lazily."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._cooldowns: Dict[Tuple[str, str], CooldownEntry] = {}

    def _key(self, unique_id: str, command: str) -> Tuple[str, str]:
        return str(unique_id), command.lower()

    def _active(self, unique_id: str, command: str) -> Optional[CooldownEntry]:
        key = self._key(unique_id, command)
        entry = self._cooldowns.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._cooldowns[key]
            return None
        return entry

    def has_cooldown(self, unique_id: str, command: str) -> bool:
        return self._active(unique_id, command) is not None

    def add_cooldown(self, unique_id: str, command: str, seconds: int) -> None:
        if seconds <= 0:
            return
        self._cooldowns[self._key(unique_id, command)] = CooldownEntry(
            expires_at=self._clock() + seconds,
            seconds=seconds,
        )
        logger.debug(f"Cooldown of {seconds}s on {command} for {unique_id}")

    def remaining(self, unique_id: str, command: str) -> float:
        entry = self._active(unique_id, command)
        if entry is None:
            return 0.0
        return max(0.0, entry.expires_at - self._clock())

    def clear(self, unique_id: Optional[str] = None) -> None:
        if unique_id is None:
            self._cooldowns.clear()
            return
        self._cooldowns = {
            key: entry for key, entry in self._cooldowns.items() if key[0] != str(unique_id)
        }

    def purge_expired(self) -> int:
        """Remove every expired entry. Returns count removed."""
        now = self._clock()
        expired = [key for key, entry in self._cooldowns.items() if entry.expires_at <= now]
        for key in expired:
            del self._cooldowns[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._cooldowns)


# =============================================================================
# Distributed Cooldowns
# =============================================================================


CooldownActor = ray.remote(MemoryCooldownHandler)


class RayCooldownHandler(CooldownHandler):
    """
    Cooldown handler backed by a CooldownActor.

    Calls block on the actor so dispatch stays synchronous.
    """

    def __init__(self, actor: Optional[ActorHandle] = None):
        self._actor = actor

    @property
    def actor(self) -> ActorHandle:
        if self._actor is None:
            self._actor = get_cooldown_actor()
        return self._actor

    def has_cooldown(self, unique_id: str, command: str) -> bool:
        return ray.get(self.actor.has_cooldown.remote(unique_id, command))

    def add_cooldown(self, unique_id: str, command: str, seconds: int) -> None:
        ray.get(self.actor.add_cooldown.remote(unique_id, command, seconds))

    def remaining(self, unique_id: str, command: str) -> float:
        return ray.get(self.actor.remaining.remote(unique_id, command))

    def clear(self, unique_id: Optional[str] = None) -> None:
        ray.get(self.actor.clear.remote(unique_id))


def start_cooldown_actor() -> ActorHandle:
    """Start (or reuse) the shared cooldown actor."""
    actor: ActorHandle = CooldownActor.options(
        name=COOLDOWN_ACTOR,
        namespace=ACTOR_NAMESPACE,
        lifetime="detached",
        get_if_exists=True,
    ).remote()  # type: ignore[assignment]
    logger.info(f"Started CooldownActor as {ACTOR_NAMESPACE}/{COOLDOWN_ACTOR}")
    return actor


def get_cooldown_actor() -> ActorHandle:
    """
    Get the cooldown actor.

    Raises ValueError if it has not been started.
    """
    try:
        return ray.get_actor(COOLDOWN_ACTOR, namespace=ACTOR_NAMESPACE)
    except ValueError:
        raise ValueError("CooldownActor not found. Ensure start_cooldown_actor() was called first.")


def stop_cooldown_actor() -> bool:
    """Kill the cooldown actor. Returns False if it wasn't running."""
    try:
        actor = ray.get_actor(COOLDOWN_ACTOR, namespace=ACTOR_NAMESPACE)
        ray.kill(actor)
        logger.info(f"Stopped CooldownActor {ACTOR_NAMESPACE}/{COOLDOWN_ACTOR}")
        return True
    except ValueError:
        logger.warning("CooldownActor not found, nothing to stop")
        return False
