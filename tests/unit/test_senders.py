"""
Sender, permission and executor registry tests.
"""

from dispatch import (
    AllowAllPermissions,
    CommandNode,
    ConsoleSender,
    ExecutorRegistry,
    FunctionExecution,
    PlayerSender,
    SenderPermissions,
)


class TestSenders:
    """Test the built-in sender implementations."""

    def test_console_has_no_identity(self, console):
        assert console.name == "CONSOLE"
        assert console.unique_id is None
        assert not console.is_player
        assert console.has_permission("anything.at.all")

    def test_player_gets_generated_id(self):
        player = PlayerSender("Steve")
        assert player.is_player
        assert len(player.unique_id) == 36

    def test_empty_id_kept(self):
        """Only a missing id is generated; an empty one is used as given."""
        assert PlayerSender("Steve", "").unique_id == ""

    def test_messages_collected(self, player):
        player.send_message("one")
        player.send_message(["two", "three"])
        assert player.messages == ["one", "two", "three"]
        assert player.last_message == "three"

        player.clear_messages()
        assert player.last_message is None


class TestPlayerPermissions:
    """Test permission grants and wildcards."""

    def test_exact_grant_case_insensitive(self):
        player = PlayerSender("Alex", permissions=["Example.Fly"])
        assert player.has_permission("example.fly")
        assert not player.has_permission("example.walk")

    def test_prefix_wildcard(self):
        player = PlayerSender("Alex", permissions=["example.admin.*"])
        assert player.has_permission("example.admin.kick")
        assert player.has_permission("example.admin.ban.ip")
        assert not player.has_permission("example.fly")

    def test_global_wildcard(self, player):
        assert player.has_permission("whatever")

    def test_grant_and_revoke(self):
        player = PlayerSender("Alex")
        player.grant("example.fly")
        assert player.has_permission("example.fly")
        player.revoke("example.fly")
        assert not player.has_permission("example.fly")


class TestPermissionHandlers:
    """Test permission decisions for nodes."""

    def test_open_node(self):
        sender = PlayerSender("Alex")
        assert SenderPermissions().has_permission(CommandNode(name="ping"), sender)

    def test_guarded_node(self):
        sender = PlayerSender("Alex")
        node = CommandNode(name="fly", permission="example.fly")
        assert not SenderPermissions().has_permission(node, sender)
        assert AllowAllPermissions().has_permission(node, sender)


class TestExecutorRegistry:
    """Test executor registration and permission inheritance."""

    def test_functions_wrapped(self):
        registry = ExecutorRegistry()
        execution = registry.register("ping", lambda sender, context, arguments: True)

        assert isinstance(execution, FunctionExecution)
        assert registry.get("ping") is execution
        assert "ping" in registry
        assert len(registry) == 1

    def test_default_handler_inherited_and_swapped(self):
        registry = ExecutorRegistry()
        execution = registry.register("fly", lambda sender, context, arguments: True)
        node = CommandNode(name="fly", permission="example.fly")
        sender = PlayerSender("Alex")

        assert not execution.can_execute(node, sender)
        registry.set_permission_handler(AllowAllPermissions())
        assert execution.can_execute(node, sender)

    def test_own_handler_kept(self):
        registry = ExecutorRegistry()
        execution = registry.register(
            "fly", FunctionExecution(lambda s, c, a: True, permission_handler=AllowAllPermissions())
        )
        registry.set_permission_handler(SenderPermissions())
        assert isinstance(execution.permission_handler, AllowAllPermissions)

    def test_decorator_with_check(self):
        registry = ExecutorRegistry()

        @registry.executor("fly", check=lambda node, sender: sender.name == "Alex")
        def fly(sender, context, arguments):
            return True

        node = CommandNode(name="fly")
        assert registry.get("fly").can_execute(node, PlayerSender("Alex"))
        assert not registry.get("fly").can_execute(node, PlayerSender("Sam"))
        assert registry.keys() == ["fly"]

    def test_unregister(self):
        registry = ExecutorRegistry()
        registry.register("ping", lambda s, c, a: True)
        assert registry.unregister("ping") is True
        assert registry.unregister("ping") is False
        assert registry.get("ping") is None
