"""Enumeration types for the Planka MCP server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available Planka tools, in catalog order."""

    # Projects
    GET_PROJECTS = "get_projects"
    GET_PROJECT = "get_project"
    CREATE_PROJECT = "create_project"
    DELETE_PROJECT = "delete_project"
    # Boards
    GET_BOARDS = "get_boards"
    GET_BOARD = "get_board"
    CREATE_BOARD = "create_board"
    DELETE_BOARD = "delete_board"
    # Lists
    GET_LISTS = "get_lists"
    GET_LIST = "get_list"
    CREATE_LIST = "create_list"
    DELETE_LIST = "delete_list"
    # Cards
    GET_CARDS = "get_cards"
    GET_CARD = "get_card"
    CREATE_CARD = "create_card"
    UPDATE_CARD = "update_card"
    DELETE_CARD = "delete_card"
    MOVE_CARD = "move_card"
    # Tasks
    GET_TASKS = "get_tasks"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"
    # Comments
    GET_COMMENTS = "get_comments"
    CREATE_COMMENT = "create_comment"
    DELETE_COMMENT = "delete_comment"
    # Time tracking
    GET_STOPWATCH = "get_stopwatch"
    START_STOPWATCH = "start_stopwatch"
    STOP_STOPWATCH = "stop_stopwatch"
    RESET_STOPWATCH = "reset_stopwatch"


class IncludedKind(StrEnum):
    """Keys of the ``included`` bundle on single-entity Planka responses."""

    BOARDS = "boards"
    LISTS = "lists"
    CARDS = "cards"
    TASKS = "tasks"
    COMMENTS = "comments"


class ParamType(StrEnum):
    """JSON schema primitive kinds used by tool arguments."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
