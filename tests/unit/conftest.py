"""
Pytest fixtures for the command dispatch unit tests.

Nothing here starts Ray; actor-backed classes are exercised through fake
handles.
"""

import pytest

from dispatch import (
    CommandNode,
    CommandRegistry,
    CommandsHandler,
    CommandTable,
    ConsoleSender,
    HandlerConfig,
    MemoryCooldownHandler,
    PlayerSender,
)

from .utils import FakeClock, build_tp_tree


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cooldowns(clock) -> MemoryCooldownHandler:
    return MemoryCooldownHandler(clock=clock)


@pytest.fixture
def table() -> CommandTable:
    return CommandTable()


@pytest.fixture
def registry(table) -> CommandRegistry:
    return CommandRegistry(host=table)


@pytest.fixture
def tp_tree() -> CommandNode:
    return build_tp_tree()


@pytest.fixture
def handler(registry, cooldowns) -> CommandsHandler:
    """Handler with colors disabled so messages compare as plain text."""
    handler = CommandsHandler(
        registry=registry,
        cooldown_handler=cooldowns,
        config=HandlerConfig(colors=False),
    )
    handler.load()
    return handler


@pytest.fixture
def player() -> PlayerSender:
    return PlayerSender("Steve", "uuid-steve", ["*"])


@pytest.fixture
def console() -> ConsoleSender:
    return ConsoleSender()
