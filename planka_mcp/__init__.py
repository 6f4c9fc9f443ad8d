"""Planka MCP Server - exposes a Planka kanban instance to MCP clients."""

__version__ = "1.0.0"
