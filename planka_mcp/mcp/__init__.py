"""MCP (Model Context Protocol) transport module.

This module contains the protocol side of the server:
- Tool definitions for tools/list
- JSON-RPC 2.0 helpers
- Argument validation, tool registry, session tracking and the dispatcher
  (these depend on planka_mcp.exceptions, import them from their modules
  directly: from planka_mcp.mcp.dispatcher import Dispatcher)
"""

from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    jsonrpc_error,
    jsonrpc_response,
)
from .tool_defs import TOOL_DEFINITIONS

__all__ = [
    # Tool definitions
    "TOOL_DEFINITIONS",
    # JSON-RPC helpers
    "jsonrpc_response",
    "jsonrpc_error",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
]
