"""
Command Loader

Builds command trees from definition data and registers them.

Expected YAML layout (a single file, or a directory of *.yaml files):

    commands:
      tp:
        aliases: [teleport]
        description: Teleport somewhere.
        executor: tp
        permission: example.tp
        parameters:
          - {name: x, type: integer}
        sub:
          here:
            executor: tp_here
            required_arguments: 1
            parameters:
              - {name: target, type: string, max_length: 16, completer: player}
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import CommandError, CommandLoadError
from .node import CommandNode
from .parameters import CommandParameter, ParameterTypeRegistry
from .registry import CommandRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# Definition Schemas
# =============================================================================


class ParameterSchema(BaseModel):
    """One positional parameter."""

    name: str = Field(..., min_length=1)
    type: str = "text"
    regex: Optional[str] = None
    max_length: int = Field(default=0, ge=0)
    completer: Optional[str] = None


class CommandSchema(BaseModel):
    """One command or subcommand. Its name is the mapping key."""

    aliases: List[str] = Field(default_factory=list)
    description: str = ""
    syntax: str = ""
    permission: str = ""
    executor: str = ""
    console: bool = True
    player: bool = True
    developer: bool = False
    required_arguments: int = Field(default=0, ge=0)
    cooldown: int = Field(default=0, ge=0)
    parameters: List[ParameterSchema] = Field(default_factory=list)
    completers: Dict[int, str] = Field(default_factory=dict)
    sub: Dict[str, "CommandSchema"] = Field(default_factory=dict)


CommandSchema.model_rebuild()


def build_node(
    name: str,
    schema: CommandSchema,
    parameter_types: Optional[ParameterTypeRegistry] = None,
) -> CommandNode:
    """Build a node (and its subcommands) from a validated schema."""
    parameters = []
    for parameter in schema.parameters:
        if parameter_types is not None and parameter.type not in parameter_types:
            logger.warning(
                f"Unknown parameter type {parameter.type} for {name}.{parameter.name}, "
                f"values will not be validated"
            )
        parameters.append(CommandParameter(**parameter.model_dump()))

    node = CommandNode(
        name=name,
        aliases=schema.aliases,
        description=schema.description,
        syntax=schema.syntax,
        permission=schema.permission,
        executor=schema.executor,
        console=schema.console,
        player=schema.player,
        developer=schema.developer,
        required_arguments=schema.required_arguments,
        cooldown=schema.cooldown,
        parameters=parameters,
        completers=dict(schema.completers),
    )

    for sub_name, sub_schema in schema.sub.items():
        node.add_sub(build_node(sub_name, sub_schema, parameter_types))

    return node


# =============================================================================
# Loaders
# =============================================================================


class CommandLoader(ABC):
    """Populates a CommandRegistry from some definition source."""

    @abstractmethod
    def load(self, registry: CommandRegistry) -> int:
        """Register every defined command. Returns the number of root commands."""
        pass


class DictCommandLoader(CommandLoader):
    """Loads commands from an in-memory mapping of name -> definition."""

    def __init__(
        self,
        commands: Mapping[str, Any],
        parameter_types: Optional[ParameterTypeRegistry] = None,
    ):
        self.commands = commands
        self.parameter_types = parameter_types

    def build(self) -> List[CommandNode]:
        nodes = []
        for name, definition in self.commands.items():
            try:
                schema = CommandSchema.model_validate(definition or {})
                nodes.append(build_node(str(name), schema, self.parameter_types))
            except ValidationError as e:
                raise CommandLoadError(f"Invalid definition for command {name}: {e}") from e
            except CommandError as e:
                raise CommandLoadError(f"Invalid command tree for {name}: {e}") from e
        return nodes

    def load(self, registry: CommandRegistry) -> int:
        nodes = self.build()
        for node in nodes:
            registry.register_node(node)
        total = sum(1 for node in nodes for _ in node.walk())
        logger.info(f"Loaded {len(nodes)} commands ({total} including subcommands)")
        return len(nodes)


class YamlCommandLoader(DictCommandLoader):
    """
    Loads commands from YAML.

    ``path`` may be a single file or a directory whose *.yaml files are
    merged in name order.
    """

    def __init__(self, path: Union[str, Path], parameter_types: Optional[ParameterTypeRegistry] = None):
        super().__init__({}, parameter_types)
        self.path = Path(path)

    def _load_yaml_file(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise CommandLoadError(f"Failed to load {path}: {e}") from e

        if not isinstance(data, dict):
            raise CommandLoadError(f"{path} must contain a mapping")

        commands = data.get("commands", {})
        if not isinstance(commands, dict):
            raise CommandLoadError(f"'commands' in {path} must be a mapping")
        return commands

    def load(self, registry: CommandRegistry) -> int:
        logger.info(f"Loading commands from: {self.path}")

        if self.path.is_dir():
            files = sorted(self.path.glob("*.yaml")) + sorted(self.path.glob("*.yml"))
        else:
            files = [self.path]

        commands: Dict[str, Any] = {}
        for path in files:
            commands.update(self._load_yaml_file(path))

        self.commands = commands
        return super().load(registry)
