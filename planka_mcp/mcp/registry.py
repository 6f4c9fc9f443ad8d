"""Tool registry: the catalog served by tools/list and the tools/call router."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..engine.handlers import HANDLERS, HandlerContext, HandlerFunc
from ..exceptions import UnknownTool
from .tool_defs import TOOL_DEFINITIONS, ToolDescriptor
from .validation import validate_arguments

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Immutable, ordered mapping of tools to their handlers.

    Built once at startup. Every tool in the catalog must have a handler and
    vice versa, so a missing wire-up fails at construction rather than on the
    first call.
    """

    def __init__(
        self,
        context: HandlerContext,
        definitions: tuple[ToolDescriptor, ...] = TOOL_DEFINITIONS,
        handlers: Mapping[str, HandlerFunc] = HANDLERS,
    ):
        names = [tool.name.value for tool in definitions]
        if len(names) != len(set(names)):
            raise ValueError("Tool catalog contains duplicate names")
        handlers = {str(name): handler for name, handler in handlers.items()}
        missing = set(names) - set(handlers)
        if missing:
            raise ValueError(f"No handler for tool(s): {', '.join(sorted(missing))}")

        self._context = context
        self._definitions = definitions
        self._tools = {tool.name.value: tool for tool in definitions}
        self._handlers = {name: handlers[name] for name in names}

    def list(self) -> list[dict[str, Any]]:
        """tools/list entries, in catalog order."""
        return [tool.to_mcp() for tool in self._definitions]

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._definitions)

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> str:
        """Validate arguments, run the tool and return its JSON text.

        Raises:
            UnknownTool: if ``name`` is not registered
            InvalidArguments: if the arguments fail the schema check
            ResolutionError: if Planka could not satisfy the call
        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownTool(name)

        params = validate_arguments(tool, arguments)
        logger.debug(f"Calling tool {name} with {sorted(params)}")
        result = await self._handlers[name](params, self._context)
        return json.dumps(result, indent=2, default=str)
