"""MCP Tool Definitions for Planka.

This module contains every tool returned by the tools/list method, in the
order they are listed. The catalog is built once at import time and never
mutated afterwards.

Tool Categories:
    - Projects: get_projects, get_project, create_project, delete_project
    - Boards: get_boards, get_board, create_board, delete_board
    - Lists: get_lists, get_list, create_list, delete_list
    - Cards: get_cards, get_card, create_card, update_card, delete_card, move_card
    - Tasks: get_tasks, create_task, update_task, delete_task
    - Comments: get_comments, create_comment, delete_comment
    - Time Tracking: get_stopwatch, start_stopwatch, stop_stopwatch, reset_stopwatch
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..models.enums import ParamType, ToolName


@dataclass(frozen=True)
class ParamSpec:
    """One declared tool argument."""

    name: str
    type: ParamType
    description: str
    required: bool = False

    def to_schema(self) -> dict[str, Any]:
        return {"type": self.type.value, "description": self.description}


@dataclass(frozen=True)
class ToolDescriptor:
    """A callable tool: name, description and argument schema."""

    name: ToolName
    description: str
    params: tuple[ParamSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        names = [p.name for p in self.params]
        if len(names) != len(set(names)):
            raise ValueError(f"Tool {self.name} declares a parameter twice")

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params if p.required)

    def param(self, name: str) -> ParamSpec | None:
        for p in self.params:
            if p.name == name:
                return p
        return None

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema in the object/properties/required shape."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.params},
        }
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def to_mcp(self) -> dict[str, Any]:
        """Entry for the tools/list result."""
        return {
            "name": self.name.value,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def _id(name: str, what: str, required: bool = True) -> ParamSpec:
    return ParamSpec(name, ParamType.STRING, what, required=required)


def _text(name: str, what: str, required: bool = False) -> ParamSpec:
    return ParamSpec(name, ParamType.STRING, what, required=required)


def _position(what: str) -> ParamSpec:
    return ParamSpec("position", ParamType.NUMBER, what)


TOOL_DEFINITIONS: tuple[ToolDescriptor, ...] = (
    # ============ Projects ============
    ToolDescriptor(ToolName.GET_PROJECTS, "Get all projects"),
    ToolDescriptor(
        ToolName.GET_PROJECT,
        "Get a project by ID",
        (_id("projectId", "The project ID"),),
    ),
    ToolDescriptor(
        ToolName.CREATE_PROJECT,
        "Create a new project",
        (
            _text("name", "The project name", required=True),
            _text("description", "The project description"),
        ),
    ),
    ToolDescriptor(
        ToolName.DELETE_PROJECT,
        "Delete a project",
        (_id("projectId", "The project ID"),),
    ),
    # ============ Boards ============
    ToolDescriptor(
        ToolName.GET_BOARDS,
        "Get all boards for a project",
        (_id("projectId", "The project ID"),),
    ),
    ToolDescriptor(
        ToolName.GET_BOARD,
        "Get a board by ID",
        (_id("boardId", "The board ID"),),
    ),
    ToolDescriptor(
        ToolName.CREATE_BOARD,
        "Create a new board",
        (
            _text("name", "The board name", required=True),
            _text("description", "The board description"),
            _id("projectId", "The project ID"),
            _position("The board position"),
        ),
    ),
    ToolDescriptor(
        ToolName.DELETE_BOARD,
        "Delete a board",
        (_id("boardId", "The board ID"),),
    ),
    # ============ Lists ============
    ToolDescriptor(
        ToolName.GET_LISTS,
        "Get all lists for a board",
        (_id("boardId", "The board ID"),),
    ),
    ToolDescriptor(
        ToolName.GET_LIST,
        "Get a list by ID",
        (_id("listId", "The list ID"),),
    ),
    ToolDescriptor(
        ToolName.CREATE_LIST,
        "Create a new list",
        (
            _text("name", "The list name", required=True),
            _id("boardId", "The board ID"),
            _position("The list position"),
        ),
    ),
    ToolDescriptor(
        ToolName.DELETE_LIST,
        "Delete a list",
        (_id("listId", "The list ID"),),
    ),
    # ============ Cards ============
    ToolDescriptor(
        ToolName.GET_CARDS,
        "Get all cards for a list",
        (_id("listId", "The list ID"),),
    ),
    ToolDescriptor(
        ToolName.GET_CARD,
        "Get a card by ID",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.CREATE_CARD,
        "Create a new card",
        (
            _text("name", "The card name", required=True),
            _text("description", "The card description"),
            _id("listId", "The list ID"),
            _position("The card position"),
            _text("dueDate", "The due date (ISO 8601 format)"),
        ),
    ),
    ToolDescriptor(
        ToolName.UPDATE_CARD,
        "Update a card",
        (
            _id("cardId", "The card ID"),
            _text("name", "The card name"),
            _text("description", "The card description"),
            _id("listId", "The list ID (to move card)", required=False),
            _position("The card position"),
            _text("dueDate", "The due date (ISO 8601 format)"),
        ),
    ),
    ToolDescriptor(
        ToolName.DELETE_CARD,
        "Delete a card",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.MOVE_CARD,
        "Move a card to a different list",
        (
            _id("cardId", "The card ID"),
            _id("listId", "The target list ID"),
            _position("The card position in the new list"),
        ),
    ),
    # ============ Tasks ============
    ToolDescriptor(
        ToolName.GET_TASKS,
        "Get all tasks for a card",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.CREATE_TASK,
        "Create a new task",
        (
            _text("name", "The task name", required=True),
            _id("cardId", "The card ID"),
            _position("The task position"),
        ),
    ),
    ToolDescriptor(
        ToolName.UPDATE_TASK,
        "Update a task",
        (
            _id("taskId", "The task ID"),
            _text("name", "The task name"),
            ParamSpec("isCompleted", ParamType.BOOLEAN, "Whether the task is completed"),
            _position("The task position"),
        ),
    ),
    ToolDescriptor(
        ToolName.DELETE_TASK,
        "Delete a task",
        (_id("taskId", "The task ID"),),
    ),
    # ============ Comments ============
    ToolDescriptor(
        ToolName.GET_COMMENTS,
        "Get all comments for a card",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.CREATE_COMMENT,
        "Create a new comment",
        (
            _text("text", "The comment text", required=True),
            _id("cardId", "The card ID"),
        ),
    ),
    ToolDescriptor(
        ToolName.DELETE_COMMENT,
        "Delete a comment",
        (_id("commentId", "The comment ID"),),
    ),
    # ============ Time Tracking ============
    ToolDescriptor(
        ToolName.GET_STOPWATCH,
        "Get the stopwatch for a card",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.START_STOPWATCH,
        "Start the stopwatch for a card",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.STOP_STOPWATCH,
        "Stop the stopwatch for a card",
        (_id("cardId", "The card ID"),),
    ),
    ToolDescriptor(
        ToolName.RESET_STOPWATCH,
        "Reset the stopwatch for a card",
        (_id("cardId", "The card ID"),),
    ),
)


def _index(definitions: tuple[ToolDescriptor, ...]) -> Mapping[str, ToolDescriptor]:
    index: dict[str, ToolDescriptor] = {}
    for tool in definitions:
        if tool.name in index:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        index[tool.name.value] = tool
    return MappingProxyType(index)


# Name -> descriptor, read-only
TOOLS_BY_NAME: Mapping[str, ToolDescriptor] = _index(TOOL_DEFINITIONS)
