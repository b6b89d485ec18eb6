"""
Command loader tests.
"""

import logging

import pytest

from dispatch import CommandLoadError, CommandsHandler, DictCommandLoader, HandlerConfig, YamlCommandLoader
from dispatch.parameters import default_parameter_types


TP_DEFINITION = {
    "tp": {
        "aliases": ["teleport"],
        "description": "Teleport somewhere",
        "executor": "tp",
        "sub": {
            "here": {
                "executor": "tp_here",
                "required_arguments": 1,
                "cooldown": 5,
                "parameters": [{"name": "target", "type": "string", "max_length": 16, "completer": "player"}],
            },
        },
    },
}

TP_YAML = """
commands:
  tp:
    aliases: [teleport]
    executor: tp
    permission: example.tp
    sub:
      here:
        executor: tp_here
        required_arguments: 1
        parameters:
          - {name: amount, type: integer}
"""


class TestDictCommandLoader:
    """Test building trees from mappings."""

    def test_load_registers_roots(self, registry):
        assert DictCommandLoader(TP_DEFINITION).load(registry) == 1

        root = registry.find("teleport")
        here = root.find_sub("here")
        assert root.description == "Teleport somewhere"
        assert here.parent is root
        assert here.required_arguments == 1
        assert here.cooldown == 5
        assert here.completer(0) == "player"
        assert here.parameter(0).max_length == 16

    def test_empty_definition_uses_defaults(self, registry):
        DictCommandLoader({"ping": None}).load(registry)

        node = registry.find("ping")
        assert node.console and node.player
        assert not node.developer
        assert node.executor == ""

    def test_completers_mapping(self, registry):
        DictCommandLoader({"give": {"completers": {0: "player", "1": "items"}}}).load(registry)
        node = registry.find("give")
        assert node.completer(0) == "player"
        assert node.completer(1) == "items"

    def test_negative_cooldown_rejected(self, registry):
        with pytest.raises(CommandLoadError, match="ping"):
            DictCommandLoader({"ping": {"cooldown": -1}}).load(registry)

    def test_unknown_field_type_rejected(self, registry):
        with pytest.raises(CommandLoadError):
            DictCommandLoader({"ping": {"required_arguments": "many"}}).load(registry)

    def test_alias_collision_rejected(self, registry):
        """A subcommand reusing its parent's name fails the load."""
        with pytest.raises(CommandLoadError, match="collides"):
            DictCommandLoader({"tp": {"sub": {"tp": {}}}}).load(registry)

    def test_failed_load_registers_nothing(self, registry):
        """Every definition is validated before any is registered."""
        with pytest.raises(CommandLoadError):
            DictCommandLoader({"ping": {}, "bad": {"cooldown": -1}}).load(registry)
        assert len(registry) == 0

    def test_unknown_parameter_type_warns(self, registry, caplog):
        loader = DictCommandLoader(
            {"scan": {"parameters": [{"name": "id", "type": "uuid"}]}},
            parameter_types=default_parameter_types(),
        )
        with caplog.at_level(logging.WARNING, logger="dispatch.loader"):
            loader.load(registry)

        assert "Unknown parameter type uuid" in caplog.text
        assert registry.find("scan").parameter(0).type == "uuid"


class TestYamlCommandLoader:
    """Test loading definitions from YAML files."""

    def test_single_file(self, registry, tmp_path):
        path = tmp_path / "commands.yaml"
        path.write_text(TP_YAML)

        assert YamlCommandLoader(path).load(registry) == 1
        root = registry.find("tp")
        assert root.permission == "example.tp"
        assert root.find_sub("here").parameter(0).type == "integer"

    def test_directory_merged(self, registry, tmp_path):
        (tmp_path / "a.yaml").write_text(TP_YAML)
        (tmp_path / "b.yml").write_text("commands:\n  ping:\n    executor: ping\n")

        assert YamlCommandLoader(tmp_path).load(registry) == 2
        assert registry.find("ping").executor == "ping"

    def test_file_without_commands(self, registry, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert YamlCommandLoader(path).load(registry) == 0

    def test_invalid_yaml(self, registry, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("commands: [unclosed\n")
        with pytest.raises(CommandLoadError):
            YamlCommandLoader(path).load(registry)

    def test_non_mapping_commands(self, registry, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("commands:\n  - tp\n")
        with pytest.raises(CommandLoadError, match="mapping"):
            YamlCommandLoader(path).load(registry)

    def test_missing_file(self, registry, tmp_path):
        with pytest.raises(CommandLoadError):
            YamlCommandLoader(tmp_path / "missing.yaml").load(registry)

    def test_handler_loads_from_loader(self, registry, tmp_path, player):
        """CommandsHandler.load() pulls definitions through its loader."""
        path = tmp_path / "commands.yaml"
        path.write_text(TP_YAML)
        handler = CommandsHandler(
            registry=registry,
            loader=YamlCommandLoader(path),
            config=HandlerConfig(colors=False, testing=True),
        )
        handler.load()
        handler.add_executor("tp_here", lambda sender, context, arguments: True)

        assert handler.handle(player, "tp", ["here", "3"]) is True

    def test_handler_keeps_empty_injected_registry(self, registry, table):
        """An empty registry passed in is the one the loader fills."""
        handler = CommandsHandler(registry=registry, loader=DictCommandLoader({"tp": {"executor": "tp"}}))
        handler.load()

        assert handler.registry is registry
        assert registry.find("tp") is not None
        assert table.bound == {"tp"}
