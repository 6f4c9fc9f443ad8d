"""Tests for the tool catalog and the tool registry."""

import json

import pytest

from planka_mcp.engine.handlers import HANDLERS, HandlerContext
from planka_mcp.exceptions import InvalidArguments, UnknownTool
from planka_mcp.mcp.registry import ToolRegistry
from planka_mcp.mcp.tool_defs import TOOL_DEFINITIONS, TOOLS_BY_NAME, ParamSpec, ToolDescriptor
from planka_mcp.models.enums import ParamType, ToolName


class TestToolDefinitions:
    """Tests for the static tool catalog."""

    def test_catalog_follows_tool_name_order(self) -> None:
        """The catalog lists every tool once, in ToolName order."""
        assert [t.name for t in TOOL_DEFINITIONS] == list(ToolName)

    def test_every_tool_has_a_handler(self) -> None:
        """No tool is listed without a handler."""
        assert set(TOOLS_BY_NAME) == {str(name) for name in HANDLERS}

    def test_required_subset_of_properties(self) -> None:
        """Required names are always declared properties."""
        for tool in TOOL_DEFINITIONS:
            schema = tool.input_schema
            assert set(schema.get("required", [])) <= set(schema["properties"])

    def test_schema_shape(self) -> None:
        """inputSchema uses the object/properties/required shape."""
        schema = TOOLS_BY_NAME["create_list"].to_mcp()["inputSchema"]
        assert schema["type"] == "object"
        assert schema["properties"]["position"]["type"] == "number"
        assert sorted(schema["required"]) == ["boardId", "name"]

    def test_no_required_key_when_nothing_required(self) -> None:
        """get_projects declares no required array."""
        assert "required" not in TOOLS_BY_NAME["get_projects"].input_schema

    def test_duplicate_parameter_rejected(self) -> None:
        """A descriptor cannot declare the same parameter twice."""
        with pytest.raises(ValueError):
            ToolDescriptor(
                ToolName.GET_CARD,
                "dup",
                (
                    ParamSpec("cardId", ParamType.STRING, "a"),
                    ParamSpec("cardId", ParamType.STRING, "b"),
                ),
            )


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_list_is_stable(self, registry: ToolRegistry) -> None:
        """tools/list content and order do not change between calls."""
        first = registry.list()
        assert first == registry.list()
        names = [tool["name"] for tool in first]
        assert len(names) == len(set(names)) == len(TOOL_DEFINITIONS)

    def test_missing_handler_rejected(self, resolver) -> None:
        """A registry cannot be built with an unwired tool."""
        handlers = {k: v for k, v in HANDLERS.items() if k != ToolName.GET_CARD}
        with pytest.raises(ValueError, match="get_card"):
            ToolRegistry(HandlerContext(resolver=resolver), handlers=handlers)

    async def test_unknown_tool(self, registry: ToolRegistry) -> None:
        """An unknown tool name raises UnknownTool."""
        with pytest.raises(UnknownTool):
            await registry.dispatch("launch_rockets", {})

    async def test_invalid_arguments_before_upstream(self, registry: ToolRegistry, planka) -> None:
        """Wrongly typed arguments never reach Planka."""
        with pytest.raises(InvalidArguments):
            await registry.dispatch("create_list", {"boardId": "B1", "name": "x", "position": "1"})
        assert planka.requests == []

    async def test_dispatch_returns_indented_json(self, registry: ToolRegistry, planka) -> None:
        """Results are JSON text with 2-space indentation."""
        planka.on("GET", "/api/projects", {"items": [{"id": "P1", "name": "Alpha"}]})

        text = await registry.dispatch("get_projects", None)

        assert text.startswith("[\n  {")
        assert json.loads(text)[0]["name"] == "Alpha"

    async def test_delete_returns_success(self, registry: ToolRegistry, planka) -> None:
        """Deletes report {"success": true}."""
        planka.on("DELETE", "/api/cards/C1", {"item": {"id": "C1"}})

        text = await registry.dispatch("delete_card", {"cardId": "C1"})

        assert json.loads(text) == {"success": True}
