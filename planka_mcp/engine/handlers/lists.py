"""List tool handlers.

Handles:
- get_lists: Lists of a board (from the board's included bundle)
- get_list: Fetch one list
- create_list: Create a list on a board
- delete_list: Delete a list
"""

from typing import Any

from .base import DELETED, HandlerContext, dump, dump_all


async def handle_get_lists(params: dict[str, Any], ctx: HandlerContext) -> list[dict[str, Any]]:
    return dump_all(await ctx.resolver.get_lists(params["boardId"]))


async def handle_get_list(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.get_list(params["listId"]))


async def handle_create_list(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    board_list = await ctx.resolver.create_list(
        params["boardId"], params["name"], position=params.get("position")
    )
    return dump(board_list)


async def handle_delete_list(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    await ctx.resolver.delete_list(params["listId"])
    return DELETED
