"""Middleware for the Planka MCP HTTP transport."""

from .cors import CORSMiddleware

__all__ = ["CORSMiddleware"]
