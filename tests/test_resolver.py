"""Tests for resource resolution against Planka."""

import pytest

from planka_mcp.exceptions import UnexpectedResponse, UpstreamStatusError
from planka_mcp.models.enums import IncludedKind
from planka_mcp.services import DEFAULT_POSITION, PlankaResolver
from planka_mcp.services.resolver import extract_included

BOARD_B1 = {
    "item": {"id": "B1", "name": "Main", "projectId": "P1"},
    "included": {
        "lists": [
            {"id": "L1", "name": "Todo", "boardId": "B1", "position": 1},
            {"id": "L2", "name": "Done", "boardId": "B1", "position": 2},
        ],
        "cards": [
            {"id": "C1", "name": "one", "listId": "L1", "boardId": "B1", "position": 1},
            {"id": "C2", "name": "two", "listId": "L2", "boardId": "B1", "position": 2},
            {"id": "C3", "name": "three", "listId": "L1", "boardId": "B1", "position": 3},
        ],
    },
}


class TestIncludedBundle:
    """Tests for extract_included."""

    def test_missing_kind_is_empty(self) -> None:
        """A kind absent from the bundle means no children."""
        assert extract_included({"item": {}, "included": {}}, IncludedKind.TASKS, "/x") == []

    def test_missing_bundle_is_empty(self) -> None:
        """A response without included means no children."""
        assert extract_included({"item": {}}, IncludedKind.BOARDS, "/x") == []

    def test_null_kind_is_empty(self) -> None:
        """A null kind means no children."""
        doc = {"included": {"cards": None}}
        assert extract_included(doc, IncludedKind.CARDS, "/x") == []

    def test_wrong_shape_rejected(self) -> None:
        """A kind that is not a list is an unexpected response."""
        with pytest.raises(UnexpectedResponse):
            extract_included({"included": {"cards": {}}}, IncludedKind.CARDS, "/x")


class TestPathEscaping:
    """Tests for ids placed into request paths."""

    async def test_slash_in_id_stays_one_segment(self, resolver: PlankaResolver, planka) -> None:
        """An id cannot reach another endpoint by smuggling path separators."""
        with pytest.raises(UpstreamStatusError):
            await resolver.get_card("C1/stopwatch/reset")

        request = planka.requests[-1]
        assert request.method == "GET"
        assert request.url.raw_path == b"/api/cards/C1%2Fstopwatch%2Freset"

    async def test_query_characters_escaped(self, resolver: PlankaResolver, planka) -> None:
        """? and # in an id are not read as query or fragment."""
        with pytest.raises(UpstreamStatusError):
            await resolver.delete_task("T1?x=1#y")

        assert planka.requests[-1].url.raw_path == b"/api/tasks/T1%3Fx%3D1%23y"

    async def test_plain_ids_unchanged(self, resolver: PlankaResolver, planka) -> None:
        """Ordinary Planka ids are sent as they are."""
        planka.on("GET", "/api/boards/1357", {"item": {"id": "1357", "name": "Main"}})

        board = await resolver.get_board("1357")

        assert board.id == "1357"


class TestChildren:
    """Tests for parent -> children reads."""

    async def test_boards_from_project(self, resolver: PlankaResolver, planka) -> None:
        """Boards come from the project's included bundle."""
        planka.on(
            "GET",
            "/api/projects/P1",
            {"item": {"id": "P1"}, "included": {"boards": [{"id": "B1", "projectId": "P1"}]}},
        )
        boards = await resolver.get_boards("P1")
        assert [b.id for b in boards] == ["B1"]
        assert boards[0].project_id == "P1"

    async def test_no_tasks_bundled(self, resolver: PlankaResolver, planka) -> None:
        """A card without a tasks bundle has no tasks."""
        planka.on("GET", "/api/cards/C1", {"item": {"id": "C1"}, "included": {}})
        assert await resolver.get_tasks("C1") == []

    async def test_lists_from_board(self, resolver: PlankaResolver, planka) -> None:
        """Lists come from the board's included bundle."""
        planka.on("GET", "/api/boards/B1", BOARD_B1)
        lists = await resolver.get_lists("B1")
        assert [(entry.id, entry.position) for entry in lists] == [("L1", 1.0), ("L2", 2.0)]


class TestGetCards:
    """Tests for the two-hop cards-of-list resolution."""

    async def test_direct_path(self, resolver: PlankaResolver, planka) -> None:
        """The list's boardId leads straight to the board's cards."""
        planka.on("GET", "/api/lists/L1", {"item": {"id": "L1", "boardId": "B1"}})
        planka.on("GET", "/api/boards/B1", BOARD_B1)

        cards = await resolver.get_cards("L1")

        assert [c.id for c in cards] == ["C1", "C3"]
        assert planka.paths() == ["GET /api/lists/L1", "GET /api/boards/B1"]

    async def test_fallback_search_finds_same_cards(self, resolver: PlankaResolver, planka) -> None:
        """When the list lookup fails, the project/board scan finds the board."""
        planka.on("GET", "/api/lists/L1", text="<!DOCTYPE html><html></html>")
        planka.on("GET", "/api/projects", {"items": [{"id": "P0"}, {"id": "P1"}, {"id": "P2"}]})
        planka.on("GET", "/api/projects/P0", {"item": {"id": "P0"}, "included": {}})
        planka.on(
            "GET",
            "/api/projects/P1",
            {"item": {"id": "P1"}, "included": {"boards": [{"id": "BX"}, {"id": "B1"}]}},
        )
        planka.on("GET", "/api/boards/BX", {"message": "gone"}, status=500)
        planka.on("GET", "/api/boards/B1", BOARD_B1)

        cards = await resolver.get_cards("L1")

        assert [c.id for c in cards] == ["C1", "C3"]
        # Stops at the first match: P2 is never read
        assert planka.calls("GET", "/api/projects/P2") == []

    async def test_fallback_skips_failing_project(self, resolver: PlankaResolver, planka) -> None:
        """A project that cannot be read is skipped."""
        planka.on("GET", "/api/lists/L2", {"message": "nope"}, status=404)
        planka.on("GET", "/api/projects", {"items": [{"id": "P0"}, {"id": "P1"}]})
        planka.on("GET", "/api/projects/P0", {"message": "forbidden"}, status=403)
        planka.on(
            "GET",
            "/api/projects/P1",
            {"item": {"id": "P1"}, "included": {"boards": [{"id": "B1"}]}},
        )
        planka.on("GET", "/api/boards/B1", BOARD_B1)

        cards = await resolver.get_cards("L2")

        assert [c.id for c in cards] == ["C2"]

    async def test_list_nowhere_is_empty(self, resolver: PlankaResolver, planka) -> None:
        """No containing board means no cards, not an error."""
        planka.on("GET", "/api/lists/L9", text="<html></html>")
        planka.on("GET", "/api/projects", {"items": [{"id": "P1"}]})
        planka.on(
            "GET",
            "/api/projects/P1",
            {"item": {"id": "P1"}, "included": {"boards": [{"id": "B1"}]}},
        )
        planka.on("GET", "/api/boards/B1", BOARD_B1)

        assert await resolver.get_cards("L9") == []

    async def test_list_without_board_id_is_empty(self, resolver: PlankaResolver, planka) -> None:
        """A list document without boardId yields no cards."""
        planka.on("GET", "/api/lists/L1", {"item": {"id": "L1"}})
        assert await resolver.get_cards("L1") == []

    async def test_board_without_cards_bundle(self, resolver: PlankaResolver, planka) -> None:
        """A board without a cards bundle yields no cards."""
        planka.on("GET", "/api/lists/L1", {"item": {"id": "L1", "boardId": "B1"}})
        planka.on("GET", "/api/boards/B1", {"item": {"id": "B1"}, "included": {"lists": []}})
        assert await resolver.get_cards("L1") == []

    async def test_project_listing_failure_propagates(
        self, resolver: PlankaResolver, planka
    ) -> None:
        """If even the project list fails, the error surfaces."""
        planka.on("GET", "/api/lists/L1", text="<html></html>")
        planka.on("GET", "/api/projects", {"message": "down"}, status=502)

        with pytest.raises(UpstreamStatusError):
            await resolver.get_cards("L1")


class TestCreates:
    """Tests for child-scoped creation."""

    async def test_create_list_default_position(self, resolver: PlankaResolver, planka) -> None:
        """An omitted position becomes the sentinel; boardId goes in the path."""
        planka.on(
            "POST",
            "/api/boards/B1/lists",
            {"item": {"id": "L5", "name": "Backlog", "boardId": "B1", "position": 65535}},
        )

        created = await resolver.create_list("B1", "Backlog")

        body = planka.body(planka.calls("POST", "/api/boards/B1/lists")[0])
        assert body == {"name": "Backlog", "position": DEFAULT_POSITION}
        assert created.name == "Backlog"
        assert created.board_id == "B1"

    async def test_explicit_zero_position_kept(self, resolver: PlankaResolver, planka) -> None:
        """position 0 is a real value, not an omission."""
        planka.on("POST", "/api/cards/C1/tasks", {"item": {"id": "T1", "name": "t"}})

        await resolver.create_task("C1", "t", position=0)

        assert planka.body(planka.requests[0])["position"] == 0

    async def test_create_board_body(self, resolver: PlankaResolver, planka) -> None:
        """Boards are created under their project."""
        planka.on("POST", "/api/projects/P1/boards", {"item": {"id": "B9", "name": "New"}})

        await resolver.create_board("P1", "New", description="d", position=10)

        body = planka.body(planka.requests[0])
        assert body == {"name": "New", "position": 10, "description": "d"}

    async def test_create_comment_body(self, resolver: PlankaResolver, planka) -> None:
        """Comments carry their card in the body."""
        planka.on("POST", "/api/comments", {"item": {"id": "M1", "text": "hi", "cardId": "C1"}})

        comment = await resolver.create_comment("C1", "hi")

        assert planka.body(planka.requests[0]) == {"text": "hi", "cardId": "C1"}
        assert comment.card_id == "C1"

    async def test_create_then_get_round_trip(self, resolver: PlankaResolver, planka) -> None:
        """A created entity fetched by id has the same name and parent."""
        card = {"id": "C7", "name": "Write docs", "listId": "L1", "position": 65535}
        planka.on("POST", "/api/lists/L1/cards", {"item": card})
        planka.on("GET", "/api/cards/C7", {"item": card, "included": {}})

        created = await resolver.create_card("L1", "Write docs")
        fetched = await resolver.get_card(created.id)

        assert (fetched.name, fetched.list_id) == ("Write docs", "L1")

    async def test_missing_item_rejected(self, resolver: PlankaResolver, planka) -> None:
        """A create response without item is unexpected."""
        planka.on("POST", "/api/projects", {"items": []})
        with pytest.raises(UnexpectedResponse, match="item"):
            await resolver.create_project("X")


class TestPatches:
    """Tests for update and move patches."""

    async def test_update_sends_only_given_fields(self, resolver: PlankaResolver, planka) -> None:
        """Only the supplied fields are patched."""
        planka.on("PATCH", "/api/cards/C1", {"item": {"id": "C1", "name": "renamed"}})

        await resolver.update_card("C1", {"name": "renamed"})

        assert planka.body(planka.requests[0]) == {"name": "renamed"}

    async def test_move_without_position(self, resolver: PlankaResolver, planka) -> None:
        """move_card without a position sends only listId."""
        planka.on("PATCH", "/api/cards/C1", {"item": {"id": "C1", "listId": "L2"}})

        moved = await resolver.move_card("C1", "L2")

        assert planka.body(planka.requests[0]) == {"listId": "L2"}
        assert moved.list_id == "L2"

    async def test_move_with_position(self, resolver: PlankaResolver, planka) -> None:
        """A supplied position is patched too."""
        planka.on("PATCH", "/api/cards/C1", {"item": {"id": "C1"}})
        await resolver.move_card("C1", "L2", position=0)
        assert planka.body(planka.requests[0]) == {"listId": "L2", "position": 0}


class TestComments:
    """Tests for get_comments and its fallback."""

    async def test_comments_endpoint(self, resolver: PlankaResolver, planka) -> None:
        """The comments endpoint is used when it answers JSON."""
        planka.on("GET", "/api/cards/C1/comments", {"items": [{"id": "M1", "text": "hi"}]})

        comments = await resolver.get_comments("C1")

        assert [c.text for c in comments] == ["hi"]
        assert planka.calls("GET", "/api/cards/C1") == []

    async def test_comments_fallback_to_card(self, resolver: PlankaResolver, planka) -> None:
        """When the endpoint serves HTML, the card bundle is used."""
        planka.on("GET", "/api/cards/C1/comments", text="<html></html>")
        planka.on(
            "GET",
            "/api/cards/C1",
            {"item": {"id": "C1"}, "included": {"comments": [{"id": "M2", "text": "yo"}]}},
        )

        comments = await resolver.get_comments("C1")

        assert [c.id for c in comments] == ["M2"]


class TestStopwatch:
    """Tests for time tracking."""

    async def test_start(self, resolver: PlankaResolver, planka) -> None:
        """start posts to the action endpoint."""
        planka.on(
            "POST",
            "/api/cards/C1/stopwatch/start",
            {"item": {"cardId": "C1", "startedAt": "2024-05-01T10:00:00Z", "duration": 30}},
        )

        stopwatch = await resolver.start_stopwatch("C1")

        assert stopwatch.duration == 30
        assert stopwatch.started_at is not None

    async def test_no_stopwatch_yet(self, resolver: PlankaResolver, planka) -> None:
        """A null item is an idle stopwatch."""
        planka.on("GET", "/api/cards/C1/stopwatch", {"item": None})

        stopwatch = await resolver.get_stopwatch("C1")

        assert stopwatch.card_id == "C1"
        assert stopwatch.duration == 0
