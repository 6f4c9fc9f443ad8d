"""Comment tool handlers.

Handles:
- get_comments: Comments of a card
- create_comment: Add a comment to a card
- delete_comment: Delete a comment
"""

from typing import Any

from .base import DELETED, HandlerContext, dump, dump_all


async def handle_get_comments(params: dict[str, Any], ctx: HandlerContext) -> list[dict[str, Any]]:
    return dump_all(await ctx.resolver.get_comments(params["cardId"]))


async def handle_create_comment(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    comment = await ctx.resolver.create_comment(params["cardId"], params["text"])
    return dump(comment)


async def handle_delete_comment(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    await ctx.resolver.delete_comment(params["commentId"])
    return DELETED
