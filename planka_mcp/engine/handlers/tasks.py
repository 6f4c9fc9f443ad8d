"""Task tool handlers.

Handles:
- get_tasks: Tasks of a card (from the card's included bundle)
- create_task: Create a task on a card
- update_task: Patch the supplied fields of a task
- delete_task: Delete a task
"""

from typing import Any

from .base import DELETED, HandlerContext, dump, dump_all, pick


async def handle_get_tasks(params: dict[str, Any], ctx: HandlerContext) -> list[dict[str, Any]]:
    return dump_all(await ctx.resolver.get_tasks(params["cardId"]))


async def handle_create_task(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    task = await ctx.resolver.create_task(
        params["cardId"], params["name"], position=params.get("position")
    )
    return dump(task)


async def handle_update_task(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    changes = pick(params, "name", "isCompleted", "position")
    return dump(await ctx.resolver.update_task(params["taskId"], changes))


async def handle_delete_task(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    await ctx.resolver.delete_task(params["taskId"])
    return DELETED
