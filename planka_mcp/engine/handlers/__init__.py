"""Tool handlers for the Planka MCP server.

This package contains the tool handlers organized by domain:
- projects: get_projects, get_project, create_project, delete_project
- boards: get_boards, get_board, create_board, delete_board
- lists: get_lists, get_list, create_list, delete_list
- cards: get_cards, get_card, create_card, update_card, delete_card, move_card
- tasks: get_tasks, create_task, update_task, delete_task
- comments: get_comments, create_comment, delete_comment
- stopwatch: get_stopwatch, start_stopwatch, stop_stopwatch, reset_stopwatch

Each handler is a standalone async function that takes:
- params: dict[str, Any] - Validated tool arguments from the MCP call
- ctx: HandlerContext - Shared dependencies (the Planka resolver)

And returns a JSON-serializable value.
"""

from types import MappingProxyType

from ...models.enums import ToolName
from .base import HandlerContext, HandlerFunc
from .boards import (
    handle_create_board,
    handle_delete_board,
    handle_get_board,
    handle_get_boards,
)
from .cards import (
    handle_create_card,
    handle_delete_card,
    handle_get_card,
    handle_get_cards,
    handle_move_card,
    handle_update_card,
)
from .comments import (
    handle_create_comment,
    handle_delete_comment,
    handle_get_comments,
)
from .lists import (
    handle_create_list,
    handle_delete_list,
    handle_get_list,
    handle_get_lists,
)
from .projects import (
    handle_create_project,
    handle_delete_project,
    handle_get_project,
    handle_get_projects,
)
from .stopwatch import (
    handle_get_stopwatch,
    handle_reset_stopwatch,
    handle_start_stopwatch,
    handle_stop_stopwatch,
)
from .tasks import (
    handle_create_task,
    handle_delete_task,
    handle_get_tasks,
    handle_update_task,
)

# Tool name -> handler, read-only
HANDLERS = MappingProxyType({
    # Projects
    ToolName.GET_PROJECTS: handle_get_projects,
    ToolName.GET_PROJECT: handle_get_project,
    ToolName.CREATE_PROJECT: handle_create_project,
    ToolName.DELETE_PROJECT: handle_delete_project,
    # Boards
    ToolName.GET_BOARDS: handle_get_boards,
    ToolName.GET_BOARD: handle_get_board,
    ToolName.CREATE_BOARD: handle_create_board,
    ToolName.DELETE_BOARD: handle_delete_board,
    # Lists
    ToolName.GET_LISTS: handle_get_lists,
    ToolName.GET_LIST: handle_get_list,
    ToolName.CREATE_LIST: handle_create_list,
    ToolName.DELETE_LIST: handle_delete_list,
    # Cards
    ToolName.GET_CARDS: handle_get_cards,
    ToolName.GET_CARD: handle_get_card,
    ToolName.CREATE_CARD: handle_create_card,
    ToolName.UPDATE_CARD: handle_update_card,
    ToolName.DELETE_CARD: handle_delete_card,
    ToolName.MOVE_CARD: handle_move_card,
    # Tasks
    ToolName.GET_TASKS: handle_get_tasks,
    ToolName.CREATE_TASK: handle_create_task,
    ToolName.UPDATE_TASK: handle_update_task,
    ToolName.DELETE_TASK: handle_delete_task,
    # Comments
    ToolName.GET_COMMENTS: handle_get_comments,
    ToolName.CREATE_COMMENT: handle_create_comment,
    ToolName.DELETE_COMMENT: handle_delete_comment,
    # Time tracking
    ToolName.GET_STOPWATCH: handle_get_stopwatch,
    ToolName.START_STOPWATCH: handle_start_stopwatch,
    ToolName.STOP_STOPWATCH: handle_stop_stopwatch,
    ToolName.RESET_STOPWATCH: handle_reset_stopwatch,
})

__all__ = [
    "HANDLERS",
    "HandlerContext",
    "HandlerFunc",
]
