"""Board tool handlers.

Handles:
- get_boards: Boards of a project (from the project's included bundle)
- get_board: Fetch one board
- create_board: Create a board under a project
- delete_board: Delete a board
"""

from typing import Any

from .base import DELETED, HandlerContext, dump, dump_all


async def handle_get_boards(params: dict[str, Any], ctx: HandlerContext) -> list[dict[str, Any]]:
    return dump_all(await ctx.resolver.get_boards(params["projectId"]))


async def handle_get_board(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.get_board(params["boardId"]))


async def handle_create_board(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    """Create a board.

    Args:
        params: Dict containing:
            - projectId: Owning project (goes in the URL, not the body)
            - name: Board name
            - description: Optional description
            - position: Optional ordering key, defaults to the append position
    """
    board = await ctx.resolver.create_board(
        params["projectId"],
        params["name"],
        description=params.get("description"),
        position=params.get("position"),
    )
    return dump(board)


async def handle_delete_board(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    await ctx.resolver.delete_board(params["boardId"])
    return DELETED
