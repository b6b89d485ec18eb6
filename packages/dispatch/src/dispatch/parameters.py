"""
Parameter Types

Named validators for positional command arguments. Each type has a default
pattern that a parameter may override with its own regex.

Built-in types:
    integer  - whole numbers, optionally negative
    decimal  - integers or decimals (alias: double)
    boolean  - true/false/yes/no/on/off
    string   - single-token text; the only type that enforces max_length
    text     - anything
    token    - identifier-like word; usually given an explicit regex
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .constants import BOUNDED_TEXT_TYPE

logger = logging.getLogger(__name__)


Validator = Callable[[Optional[str], str], bool]


@dataclass
class CommandParameter:
    """Declared parameter at one argument position of a command."""

    name: str
    type: str = "text"
    regex: Optional[str] = None  # Overrides the type's default pattern
    max_length: int = 0  # 0 = unbounded; enforced for the string type only
    completer: Optional[str] = None


@dataclass
class ParameterType:
    """A named argument validator."""

    name: str
    pattern: str = ".*"
    validator: Optional[Validator] = None
    bounded: bool = False

    def validate(self, regex: Optional[str], value: str) -> bool:
        """Check a raw argument against ``regex`` or the default pattern."""
        if self.validator is not None:
            return self.validator(regex, value)

        pattern = regex or self.pattern
        try:
            return re.fullmatch(pattern, value) is not None
        except re.error as e:
            logger.warning(f"Invalid pattern {pattern!r} for parameter type {self.name}: {e}")
            return False


def _boolean_validator(regex: Optional[str], value: str) -> bool:
    if regex:
        return re.fullmatch(regex, value) is not None
    return value.lower() in ("true", "false", "yes", "no", "on", "off")


class ParameterTypeRegistry:
    """Registry of parameter types keyed by case-insensitive name."""

    def __init__(self, types: Optional[List[ParameterType]] = None):
        self._types: Dict[str, ParameterType] = {}
        for parameter_type in types or []:
            self.register(parameter_type)

    def register(self, parameter_type: ParameterType, *aliases: str) -> None:
        for key in (parameter_type.name, *aliases):
            self._types[key.lower()] = parameter_type

    def find(self, name: str) -> Optional[ParameterType]:
        """Look up a type. Unknown names return None and skip validation."""
        return self._types.get(name.lower())

    def names(self) -> List[str]:
        return sorted(self._types)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._types


@dataclass
class ParameterCheck:
    """Outcome of validating one argument."""

    parameter: CommandParameter
    valid_type: bool = True
    valid_length: bool = True
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.valid_type and self.valid_length


def check_argument(
    types: ParameterTypeRegistry, parameter: CommandParameter, value: str
) -> ParameterCheck:
    """Validate one argument value against its declared parameter."""
    check = ParameterCheck(parameter=parameter)
    parameter_type = types.find(parameter.type)

    if parameter_type is None:
        return check

    if not parameter_type.validate(parameter.regex, value):
        check.valid_type = False
        check.errors.append(f"{parameter.name}: expected {parameter.type}")
        return check

    if parameter_type.bounded and 0 < parameter.max_length < len(value):
        check.valid_length = False
        check.errors.append(f"{parameter.name}: longer than {parameter.max_length}")

    return check


def default_parameter_types() -> ParameterTypeRegistry:
    """Build a registry holding the built-in parameter types."""
    registry = ParameterTypeRegistry()
    registry.register(ParameterType("integer", r"-?\d+"), "int")
    registry.register(ParameterType("decimal", r"-?\d+(\.\d+)?"), "double")
    registry.register(ParameterType("boolean", validator=_boolean_validator), "bool")
    registry.register(ParameterType(BOUNDED_TEXT_TYPE, r"\S+", bounded=True))
    registry.register(ParameterType("text", r".*"))
    registry.register(ParameterType("token", r"[A-Za-z0-9_\-]+"), "enum")
    return registry
