"""
Command Service

Hosts a CommandsHandler for senders that live in other processes, such as
a network gateway. Senders are described by SenderInfo records and the
messages a command produced come back in a DispatchResult.

CommandServiceActor wraps the service in a Ray actor. Ray runs an actor's
method calls one at a time, which gives the handler the serialized
command-processing path it expects.

The handler is configured by a bootstrap reference ("module:function")
resolved with importlib inside the actor process:

    def bootstrap(handler: CommandsHandler) -> None:
        handler.loader = YamlCommandLoader("commands.yaml")
        handler.add_executor("tp", teleport)

    actor = start_command_service("myplugin.commands:bootstrap")
    result = ray.get(actor.handle_command.remote(info, "/tp here 5"))
"""

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import ray
from ray.actor import ActorHandle

from .config import HandlerConfig, get_handler_config
from .constants import ACTOR_NAMESPACE, COMMAND_SERVICE_ACTOR
from .handler import CommandsHandler, split_command
from .sender import ConsoleSender, MessageCollector, PlayerSender

logger = logging.getLogger(__name__)


@dataclass
class SenderInfo:
    """Serializable description of a command sender."""

    name: str
    unique_id: Optional[str] = None  # None for the console
    permissions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.unique_id is not None and not self.unique_id.strip():
            raise ValueError(f"Sender {self.name} has a blank unique_id, use None for the console")

    def to_sender(self) -> MessageCollector:
        if self.unique_id is None:
            return ConsoleSender()
        return PlayerSender(self.name, self.unique_id, self.permissions)


@dataclass
class DispatchResult:
    """Outcome of a remote dispatch."""

    success: bool
    messages: List[str] = field(default_factory=list)


def resolve_bootstrap(reference: str) -> Callable[[CommandsHandler], Any]:
    """Resolve a "module:function" reference to a callable."""
    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Bootstrap reference must look like 'module:function', got {reference!r}")

    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        logger.error(f"Failed to resolve bootstrap {reference}: {e}")
        raise


class CommandService:
    """Dispatches commands on behalf of remote senders."""

    def __init__(
        self,
        bootstrap: Optional[str] = None,
        config: Optional[HandlerConfig] = None,
        handler: Optional[CommandsHandler] = None,
    ):
        self._online: Dict[str, str] = {}  # unique_id -> name
        self._handler = handler or CommandsHandler(
            config=config or get_handler_config(),
            players=self.online_players,
        )
        self._dispatched = 0

        if bootstrap:
            resolve_bootstrap(bootstrap)(self._handler)

        self._handler.load()
        logger.info("CommandService initialized")

    @property
    def handler(self) -> CommandsHandler:
        return self._handler

    # =========================================================================
    # Presence
    # =========================================================================

    def player_joined(self, info: SenderInfo) -> None:
        if info.unique_id is not None:
            self._online[info.unique_id] = info.name

    def player_left(self, unique_id: str) -> None:
        self._online.pop(unique_id, None)

    def online_players(self) -> List[str]:
        return sorted(self._online.values(), key=str.lower)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def dispatch(self, info: SenderInfo, label: str, arguments: Sequence[str]) -> DispatchResult:
        sender = info.to_sender()
        success = self._handler.handle(sender, label, list(arguments))
        self._dispatched += 1
        return DispatchResult(success=success, messages=list(sender.messages))

    def handle_command(self, info: SenderInfo, raw_input: str) -> DispatchResult:
        label, arguments = split_command(raw_input)
        if not label:
            return DispatchResult(success=False)
        return self.dispatch(info, label, arguments)

    def tab_complete(self, info: SenderInfo, label: str, arguments: Sequence[str]) -> List[str]:
        return self._handler.tab(info.to_sender(), label, list(arguments))

    def get_help(self, label: str, page: int = 1) -> List[str]:
        return self._handler.get_help(label, page)

    def set_developers(self, developers: List[str]) -> None:
        self._handler.developers = list(developers)

    def get_stats(self) -> Dict[str, Any]:
        return {
            "commands": len(self._handler.registry),
            "executors": len(self._handler.executors),
            "online": len(self._online),
            "dispatched": self._dispatched,
        }


# =============================================================================
# Actor Lifecycle
# =============================================================================


CommandServiceActor = ray.remote(CommandService)


def start_command_service(
    bootstrap: Optional[str] = None, config: Optional[HandlerConfig] = None
) -> ActorHandle:
    """Start the command service actor. Returns the actor handle."""
    actor: ActorHandle = CommandServiceActor.options(
        name=COMMAND_SERVICE_ACTOR,
        namespace=ACTOR_NAMESPACE,
        lifetime="detached",
        get_if_exists=True,
    ).remote(bootstrap, config)  # type: ignore[assignment]
    logger.info(f"Started CommandServiceActor as {ACTOR_NAMESPACE}/{COMMAND_SERVICE_ACTOR}")
    return actor


def get_command_service() -> ActorHandle:
    """
    Get the command service actor.

    Raises ValueError if the actor doesn't exist.
    """
    try:
        return ray.get_actor(COMMAND_SERVICE_ACTOR, namespace=ACTOR_NAMESPACE)
    except ValueError:
        raise ValueError(
            "CommandServiceActor not found. Ensure start_command_service() was called first."
        )


def stop_command_service() -> bool:
    """Kill the command service actor. Returns False if it wasn't running."""
    try:
        actor = ray.get_actor(COMMAND_SERVICE_ACTOR, namespace=ACTOR_NAMESPACE)
        ray.kill(actor)
        logger.info(f"Stopped CommandServiceActor {ACTOR_NAMESPACE}/{COMMAND_SERVICE_ACTOR}")
        return True
    except ValueError:
        logger.warning("CommandServiceActor not found, nothing to stop")
        return False
