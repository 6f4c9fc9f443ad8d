"""Base infrastructure for tool handlers.

This module provides the common types and utilities used by all handler modules.
Each handler receives the validated tool arguments and a HandlerContext, and
returns a JSON-serializable value that becomes the tool's text result.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Coroutine

from ...exceptions import InvalidArguments

if TYPE_CHECKING:
    from ...models.planka import PlankaModel
    from ...services.resolver import PlankaResolver


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    Holds the dependencies handlers need so they stay decoupled from the
    transport and the registry.
    """

    resolver: "PlankaResolver"


# Type alias for handler functions
HandlerFunc = Callable[
    [dict[str, Any], HandlerContext],
    Coroutine[Any, Any, Any],
]

# Result of every delete tool
DELETED = {"success": True}


def dump(entity: "PlankaModel") -> dict[str, Any]:
    return entity.to_json()


def dump_all(entities: Iterable["PlankaModel"]) -> list[dict[str, Any]]:
    return [entity.to_json() for entity in entities]


def parse_due_date(value: str) -> datetime:
    """Parse an ISO 8601 timestamp argument.

    Raises:
        InvalidArguments: if the value is not ISO 8601
    """
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidArguments(
            f"Invalid parameter dueDate: expected ISO 8601, got {value!r}"
        ) from e


def pick(params: dict[str, Any], *names: str) -> dict[str, Any]:
    """Copy only the named arguments the caller actually supplied."""
    return {name: params[name] for name in names if name in params}
