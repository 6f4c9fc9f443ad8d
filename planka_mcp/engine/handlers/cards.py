"""Card tool handlers.

Handles:
- get_cards: Cards of a list (resolved through the owning board)
- get_card: Fetch one card
- create_card: Create a card in a list
- update_card: Patch the supplied fields of a card
- delete_card: Delete a card
- move_card: Move a card to another list
"""

from typing import Any

from .base import DELETED, HandlerContext, dump, dump_all, parse_due_date, pick


async def handle_get_cards(params: dict[str, Any], ctx: HandlerContext) -> list[dict[str, Any]]:
    return dump_all(await ctx.resolver.get_cards(params["listId"]))


async def handle_get_card(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    return dump(await ctx.resolver.get_card(params["cardId"]))


async def handle_create_card(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    """Create a card.

    Args:
        params: Dict containing:
            - listId: Owning list (goes in the URL, not the body)
            - name: Card name
            - description: Optional description
            - position: Optional ordering key, defaults to the append position
            - dueDate: Optional ISO 8601 timestamp
    """
    due_date = params.get("dueDate")
    card = await ctx.resolver.create_card(
        params["listId"],
        params["name"],
        description=params.get("description"),
        position=params.get("position"),
        due_date=parse_due_date(due_date) if due_date is not None else None,
    )
    return dump(card)


async def handle_update_card(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    """Update a card.

    Only fields present in the call are sent. Planka treats a present field
    as "change this", so nothing is defaulted here.
    """
    changes = pick(params, "name", "description", "listId", "position")
    if "dueDate" in params:
        changes["dueDate"] = parse_due_date(params["dueDate"]).isoformat()
    card = await ctx.resolver.update_card(params["cardId"], changes)
    return dump(card)


async def handle_delete_card(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    await ctx.resolver.delete_card(params["cardId"])
    return DELETED


async def handle_move_card(params: dict[str, Any], ctx: HandlerContext) -> dict[str, Any]:
    card = await ctx.resolver.move_card(
        params["cardId"], params["listId"], position=params.get("position")
    )
    return dump(card)
