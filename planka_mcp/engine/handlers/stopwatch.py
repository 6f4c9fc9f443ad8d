"""Time tracking tool handlers.

Handles:
- get_stopwatch: Current stopwatch of a card
- start_stopwatch / stop_stopwatch / reset_stopwatch: Stopwatch actions
"""

from typing import Any

from .base import HandlerContext, dump


async def handle_get_stopwatch(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.get_stopwatch(params["cardId"]))


async def handle_start_stopwatch(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.start_stopwatch(params["cardId"]))


async def handle_stop_stopwatch(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.stop_stopwatch(params["cardId"]))


async def handle_reset_stopwatch(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.reset_stopwatch(params["cardId"]))
