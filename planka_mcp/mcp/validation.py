"""Argument validation for tools/call.

Arguments are checked against the tool's declared schema before anything is
sent to Planka, so a bad argument surfaces as INVALID_PARAMS rather than as an
upstream failure.
"""

from typing import Any

from ..exceptions import InvalidArguments
from ..models.enums import ParamType
from .tool_defs import ToolDescriptor


def _matches(value: Any, kind: ParamType) -> bool:
    """Check a JSON value against a schema primitive kind.

    bool is a subclass of int in Python, so it is excluded from the numeric
    kinds explicitly.
    """
    if kind is ParamType.STRING:
        return isinstance(value, str)
    if kind is ParamType.BOOLEAN:
        return isinstance(value, bool)
    if kind is ParamType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is ParamType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if kind is ParamType.OBJECT:
        return isinstance(value, dict)
    if kind is ParamType.ARRAY:
        return isinstance(value, list)
    return False


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def validate_arguments(tool: ToolDescriptor, arguments: dict[str, Any] | None) -> dict[str, Any]:
    """Validate tool arguments against the tool's schema.

    Args:
        tool: Descriptor of the tool being called
        arguments: Raw ``arguments`` object from tools/call (may be None)

    Returns:
        The arguments to hand to the handler. Optional arguments given as
        null are dropped, as are keys the tool does not declare.

    Raises:
        InvalidArguments: a required argument is missing or null, or a
            supplied argument has the wrong primitive type
    """
    arguments = arguments or {}
    problems: list[str] = []
    cleaned: dict[str, Any] = {}

    for spec in tool.params:
        if spec.name not in arguments or arguments[spec.name] is None:
            if spec.required:
                problems.append(f"missing required argument '{spec.name}'")
            continue
        value = arguments[spec.name]
        if not _matches(value, spec.type):
            problems.append(
                f"argument '{spec.name}' must be of type {spec.type.value}, "
                f"got {_type_name(value)}"
            )
            continue
        cleaned[spec.name] = value

    if problems:
        raise InvalidArguments(f"Invalid parameter for {tool.name}: " + "; ".join(problems))
    return cleaned
