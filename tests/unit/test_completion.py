"""
Tab completion tests.
"""

import pytest

from dispatch import (
    CommandNode,
    CommandParameter,
    CommandsHandler,
    CompleterRegistry,
    HandlerConfig,
    ListCompleter,
)

from .utils import RecordingExecution


@pytest.fixture
def online():
    return ["Steve", "Alex", "stan"]


@pytest.fixture
def tab_handler(registry, cooldowns, tp_tree, online):
    """Handler with /tp and /give registered and three players online."""
    handler = CommandsHandler(
        registry=registry,
        cooldown_handler=cooldowns,
        config=HandlerConfig(colors=False),
        players=lambda: online,
    )
    handler.load()

    handler.registry.register_node(tp_tree)
    handler.registry.register_node(
        CommandNode(
            name="give",
            executor="give",
            parameters=[
                CommandParameter("target", "string", completer="player"),
                CommandParameter("item", "token", completer="items"),
            ],
        )
    )
    handler.add_executor("give", RecordingExecution())
    handler.add_completer("items", ListCompleter(["diamond", "dirt", "stone"]))
    return handler


class TestSubCommandCompletion:
    """Test the default subcommand completer."""

    def test_no_arguments_lists_children(self, tab_handler, player):
        assert tab_handler.tab(player, "tp", []) == ["here"]

    def test_prefix_filter(self, tab_handler, player):
        """Candidates start with the partial argument, ignoring case."""
        assert tab_handler.tab(player, "tp", ["HE"]) == ["here"]
        assert tab_handler.tab(player, "tp", ["x"]) == []

    def test_child_names_returned_for_alias_matches(self, tab_handler, player):
        """A child matched through any of its aliases is offered once, by name."""
        tab_handler.registry.find("tp").add_sub(CommandNode(name="home", aliases=["hm"]))

        assert tab_handler.tab(player, "tp", ["h"]) == ["here", "home"]
        assert tab_handler.tab(player, "tp", ["hm"]) == ["home"]

    def test_unknown_command(self, tab_handler, player):
        assert tab_handler.tab(player, "nope", ["a"]) == []


class TestPositionalCompletion:
    """Test completers bound to argument positions."""

    def test_player_completer(self, tab_handler, player):
        """Online players are filtered by prefix and sorted."""
        assert tab_handler.tab(player, "give", ["st"]) == ["stan", "Steve"]

    def test_second_position(self, tab_handler, player):
        assert tab_handler.tab(player, "give", ["Steve", "di"]) == ["diamond", "dirt"]

    def test_unregistered_completer_falls_back(self, tab_handler, player):
        """A position whose completer isn't registered falls back to subcommands."""
        tab_handler.completers.unregister("items")
        assert tab_handler.tab(player, "give", ["Steve", "di"]) == []

    def test_position_without_completer(self, tab_handler, player):
        assert tab_handler.tab(player, "tp", ["here", "1"]) == []


class TestCompletionIsPure:
    """Test that completion never changes state."""

    def test_no_side_effects(self, tab_handler, player, cooldowns):
        """Completion runs no executors, sends nothing and sets no cooldowns."""
        before = tab_handler.registry.get_all()

        first = tab_handler.tab(player, "give", ["s"])
        second = tab_handler.tab(player, "give", ["s"])

        assert first == second
        assert tab_handler.registry.get_all() == before
        assert not tab_handler.executors.get("give").called
        assert player.messages == []
        assert len(cooldowns) == 0

    def test_ignores_preconditions(self, tab_handler, player):
        """Completion works even for commands the sender couldn't run."""
        tab_handler.registry.find("tp").permission = "example.tp"
        tab_handler.registry.find("tp").player = False

        assert tab_handler.tab(player, "tp", []) == ["here"]


class TestCompleterRegistry:
    """Test the completer registry itself."""

    def test_register_and_get(self):
        registry = CompleterRegistry()
        completer = ListCompleter(["a"])
        registry.register("letters", completer)

        assert registry.get("letters") is completer
        assert "letters" in registry
        assert registry.keys() == ["letters"]

    def test_missing_and_none(self):
        registry = CompleterRegistry()
        assert registry.get("nope") is None
        assert registry.get(None) is None
        assert registry.unregister("nope") is False

    def test_default_completers_loaded(self, handler):
        assert "player" in handler.completers
        assert "sub_command" in handler.completers
