"""Pydantic models for the Planka MCP server.

Import from submodules directly for cleaner imports:

    from planka_mcp.models.enums import ToolName
    from planka_mcp.models.planka import Card
"""

# ============ ENUMS ============
from .enums import IncludedKind, ParamType, ToolName

# ============ WIRE MODELS ============
from .jsonrpc import InitializeParams, JsonRpcRequest, ToolCallParams

# ============ PLANKA RESOURCES ============
from .planka import (
    Board,
    BoardList,
    Card,
    Comment,
    PlankaModel,
    Project,
    Stopwatch,
    Task,
    User,
)

__all__ = [
    # Enums
    "IncludedKind",
    "ParamType",
    "ToolName",
    # Wire
    "InitializeParams",
    "JsonRpcRequest",
    "ToolCallParams",
    # Planka
    "Board",
    "BoardList",
    "Card",
    "Comment",
    "PlankaModel",
    "Project",
    "Stopwatch",
    "Task",
    "User",
]
