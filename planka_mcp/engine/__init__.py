"""Tool execution engine: per-domain handlers behind the tool registry."""
