"""Resource resolution against the Planka API.

Planka only exposes two read shapes: "list all projects" and "get one entity
with its direct children side-loaded under ``included``". Collections such as
"boards of a project" or "tasks of a card" are therefore read from the parent's
included bundle. A kind missing from the bundle means zero children.

Cards are only bundled on the board, not on the list, so ``get_cards`` first
needs the list's board. The direct list lookup is tried first; when Planka
cannot answer it, the project -> board -> list graph is scanned until the list
is found.
"""

import logging
from datetime import datetime
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import ValidationError

from ..exceptions import ResolutionError, UnexpectedResponse
from ..models.enums import IncludedKind
from ..models.planka import (
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
from .planka_client import PlankaClient

logger = logging.getLogger(__name__)

# Position used when a create call does not supply one; sorts after
# existing items under Planka's fractional positioning
DEFAULT_POSITION = 65535

M = TypeVar("M", bound=PlankaModel)


def _segment(value: str) -> str:
    """Escape an id for use as exactly one URL path segment."""
    return quote(value, safe="")


def _parse(model: type[M], data: Any, endpoint: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise UnexpectedResponse(
            f"unexpected {model.__name__} shape: {e.error_count()} validation error(s)",
            endpoint,
        ) from e


def _parse_many(model: type[M], data: Any, endpoint: str) -> list[M]:
    if not isinstance(data, list):
        raise UnexpectedResponse(f"expected a list of {model.__name__}", endpoint)
    return [_parse(model, entry, endpoint) for entry in data]


def extract_item(doc: Any, endpoint: str) -> Any:
    """Return ``doc["item"]`` or fail with UnexpectedResponse."""
    if not isinstance(doc, dict) or "item" not in doc:
        raise UnexpectedResponse("response has no 'item'", endpoint)
    return doc["item"]


def extract_items(doc: Any, endpoint: str) -> list[Any]:
    """Return ``doc["items"]`` (a missing or null key is an empty list)."""
    if not isinstance(doc, dict):
        raise UnexpectedResponse("response is not a JSON object", endpoint)
    items = doc.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise UnexpectedResponse("'items' is not a list", endpoint)
    return items


def extract_included(doc: Any, kind: IncludedKind, endpoint: str) -> list[Any]:
    """Return one kind from a response's included bundle.

    Absence of the bundle, or of the kind inside it, is "no children", not an
    error.
    """
    if not isinstance(doc, dict):
        raise UnexpectedResponse("response is not a JSON object", endpoint)
    included = doc.get("included")
    if not isinstance(included, dict):
        return []
    entries = included.get(kind.value)
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise UnexpectedResponse(f"included '{kind.value}' is not a list", endpoint)
    return entries


def _stopwatch(card_id: str, item: Any, endpoint: str) -> Stopwatch:
    # A card that never had time tracked answers with a null item
    if item is None:
        return Stopwatch(card_id=card_id)
    return _parse(Stopwatch, item, endpoint)


def _with_position(body: dict[str, Any], position: float | None) -> dict[str, Any]:
    body["position"] = DEFAULT_POSITION if position is None else position
    return body


class PlankaResolver:
    """Turns tool operations into one or more Planka API calls."""

    def __init__(self, client: PlankaClient):
        self.client = client

    async def _fetch(self, endpoint: str) -> Any:
        return await self.client.get(endpoint)

    # ============ Users ============

    async def get_me(self) -> User:
        """Return the user the client is authenticated as."""
        endpoint = "/api/users/me"
        doc = await self._fetch(endpoint)
        return _parse(User, extract_item(doc, endpoint), endpoint)

    # ============ Projects ============

    async def get_projects(self) -> list[Project]:
        endpoint = "/api/projects"
        doc = await self._fetch(endpoint)
        return _parse_many(Project, extract_items(doc, endpoint), endpoint)

    async def get_project(self, project_id: str) -> Project:
        endpoint = f"/api/projects/{_segment(project_id)}"
        doc = await self._fetch(endpoint)
        return _parse(Project, extract_item(doc, endpoint), endpoint)

    async def create_project(self, name: str, description: str | None = None) -> Project:
        endpoint = "/api/projects"
        body: dict[str, Any] = {"name": name}
        if description:
            body["description"] = description
        doc = await self.client.post(endpoint, body)
        return _parse(Project, extract_item(doc, endpoint), endpoint)

    async def delete_project(self, project_id: str) -> None:
        await self.client.delete(f"/api/projects/{_segment(project_id)}")

    # ============ Boards ============

    async def get_boards(self, project_id: str) -> list[Board]:
        endpoint = f"/api/projects/{_segment(project_id)}"
        doc = await self._fetch(endpoint)
        return _parse_many(Board, extract_included(doc, IncludedKind.BOARDS, endpoint), endpoint)

    async def get_board(self, board_id: str) -> Board:
        endpoint = f"/api/boards/{_segment(board_id)}"
        doc = await self._fetch(endpoint)
        return _parse(Board, extract_item(doc, endpoint), endpoint)

    async def create_board(
        self,
        project_id: str,
        name: str,
        description: str | None = None,
        position: float | None = None,
    ) -> Board:
        endpoint = f"/api/projects/{_segment(project_id)}/boards"
        body = _with_position({"name": name}, position)
        if description:
            body["description"] = description
        doc = await self.client.post(endpoint, body)
        return _parse(Board, extract_item(doc, endpoint), endpoint)

    async def delete_board(self, board_id: str) -> None:
        await self.client.delete(f"/api/boards/{_segment(board_id)}")

    # ============ Lists ============

    async def get_lists(self, board_id: str) -> list[BoardList]:
        endpoint = f"/api/boards/{_segment(board_id)}"
        doc = await self._fetch(endpoint)
        return _parse_many(BoardList, extract_included(doc, IncludedKind.LISTS, endpoint), endpoint)

    async def get_list(self, list_id: str) -> BoardList:
        endpoint = f"/api/lists/{_segment(list_id)}"
        doc = await self._fetch(endpoint)
        return _parse(BoardList, extract_item(doc, endpoint), endpoint)

    async def create_list(
        self, board_id: str, name: str, position: float | None = None
    ) -> BoardList:
        endpoint = f"/api/boards/{_segment(board_id)}/lists"
        body = _with_position({"name": name}, position)
        doc = await self.client.post(endpoint, body)
        return _parse(BoardList, extract_item(doc, endpoint), endpoint)

    async def delete_list(self, list_id: str) -> None:
        await self.client.delete(f"/api/lists/{_segment(list_id)}")

    # ============ Cards ============

    async def find_board_of_list(self, list_id: str) -> str | None:
        """Return the id of the board that owns a list, or None.

        Tries ``GET /api/lists/{id}`` first. If Planka cannot answer that,
        scans projects, then their boards, then each board's lists, stopping
        at the first match. Failures on an individual board are skipped; a
        failure to list projects propagates.
        """
        try:
            board_list = await self.get_list(list_id)
        except ResolutionError as e:
            logger.info(f"Direct lookup of list {list_id} failed ({e.message}), scanning boards")
        else:
            return board_list.board_id or None

        for project in await self.get_projects():
            try:
                boards = await self.get_boards(project.id)
            except ResolutionError as e:
                logger.debug(f"Skipping project {project.id} during list search: {e.message}")
                continue
            for board in boards:
                try:
                    lists = await self.get_lists(board.id)
                except ResolutionError as e:
                    logger.debug(f"Skipping board {board.id} during list search: {e.message}")
                    continue
                if any(candidate.id == list_id for candidate in lists):
                    return board.id
        return None

    async def get_cards(self, list_id: str) -> list[Card]:
        """Return the cards of a list, read from the owning board's bundle."""
        board_id = await self.find_board_of_list(list_id)
        if not board_id:
            return []

        endpoint = f"/api/boards/{_segment(board_id)}"
        doc = await self._fetch(endpoint)
        cards = _parse_many(Card, extract_included(doc, IncludedKind.CARDS, endpoint), endpoint)
        return [card for card in cards if card.list_id == list_id]

    async def get_card(self, card_id: str) -> Card:
        endpoint = f"/api/cards/{_segment(card_id)}"
        doc = await self._fetch(endpoint)
        return _parse(Card, extract_item(doc, endpoint), endpoint)

    async def create_card(
        self,
        list_id: str,
        name: str,
        description: str | None = None,
        position: float | None = None,
        due_date: datetime | None = None,
    ) -> Card:
        endpoint = f"/api/lists/{_segment(list_id)}/cards"
        body = _with_position({"name": name}, position)
        if description:
            body["description"] = description
        if due_date is not None:
            body["dueDate"] = due_date.isoformat()
        doc = await self.client.post(endpoint, body)
        return _parse(Card, extract_item(doc, endpoint), endpoint)

    async def update_card(self, card_id: str, changes: dict[str, Any]) -> Card:
        """Patch a card with exactly the given camelCase fields."""
        endpoint = f"/api/cards/{_segment(card_id)}"
        doc = await self.client.patch(endpoint, changes)
        return _parse(Card, extract_item(doc, endpoint), endpoint)

    async def move_card(self, card_id: str, list_id: str, position: float | None = None) -> Card:
        changes: dict[str, Any] = {"listId": list_id}
        if position is not None:
            changes["position"] = position
        return await self.update_card(card_id, changes)

    async def delete_card(self, card_id: str) -> None:
        await self.client.delete(f"/api/cards/{_segment(card_id)}")

    # ============ Tasks ============

    async def get_tasks(self, card_id: str) -> list[Task]:
        endpoint = f"/api/cards/{_segment(card_id)}"
        doc = await self._fetch(endpoint)
        return _parse_many(Task, extract_included(doc, IncludedKind.TASKS, endpoint), endpoint)

    async def create_task(self, card_id: str, name: str, position: float | None = None) -> Task:
        endpoint = f"/api/cards/{_segment(card_id)}/tasks"
        body = _with_position({"name": name}, position)
        doc = await self.client.post(endpoint, body)
        return _parse(Task, extract_item(doc, endpoint), endpoint)

    async def update_task(self, task_id: str, changes: dict[str, Any]) -> Task:
        endpoint = f"/api/tasks/{_segment(task_id)}"
        doc = await self.client.patch(endpoint, changes)
        return _parse(Task, extract_item(doc, endpoint), endpoint)

    async def delete_task(self, task_id: str) -> None:
        await self.client.delete(f"/api/tasks/{_segment(task_id)}")

    # ============ Comments ============

    async def get_comments(self, card_id: str) -> list[Comment]:
        """Return a card's comments.

        Uses the comments endpoint when Planka serves it, otherwise the
        card's included comments.
        """
        endpoint = f"/api/cards/{_segment(card_id)}/comments"
        try:
            doc = await self._fetch(endpoint)
            return _parse_many(Comment, extract_items(doc, endpoint), endpoint)
        except ResolutionError as e:
            logger.info(
                f"Comments endpoint failed for card {card_id} ({e.message}), using card bundle"
            )

        endpoint = f"/api/cards/{_segment(card_id)}"
        doc = await self._fetch(endpoint)
        comments = extract_included(doc, IncludedKind.COMMENTS, endpoint)
        return _parse_many(Comment, comments, endpoint)

    async def create_comment(self, card_id: str, text: str) -> Comment:
        endpoint = "/api/comments"
        doc = await self.client.post(endpoint, {"text": text, "cardId": card_id})
        return _parse(Comment, extract_item(doc, endpoint), endpoint)

    async def delete_comment(self, comment_id: str) -> None:
        await self.client.delete(f"/api/comments/{_segment(comment_id)}")

    # ============ Time tracking ============

    async def get_stopwatch(self, card_id: str) -> Stopwatch:
        endpoint = f"/api/cards/{_segment(card_id)}/stopwatch"
        doc = await self._fetch(endpoint)
        return _stopwatch(card_id, extract_item(doc, endpoint), endpoint)

    async def _stopwatch_action(self, card_id: str, action: str) -> Stopwatch:
        endpoint = f"/api/cards/{_segment(card_id)}/stopwatch/{action}"
        doc = await self.client.post(endpoint)
        return _stopwatch(card_id, extract_item(doc, endpoint), endpoint)

    async def start_stopwatch(self, card_id: str) -> Stopwatch:
        return await self._stopwatch_action(card_id, "start")

    async def stop_stopwatch(self, card_id: str) -> Stopwatch:
        return await self._stopwatch_action(card_id, "stop")

    async def reset_stopwatch(self, card_id: str) -> Stopwatch:
        return await self._stopwatch_action(card_id, "reset")
