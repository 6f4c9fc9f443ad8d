"""Error taxonomy for the Planka MCP server.

Every error that can reach a caller maps onto a JSON-RPC 2.0 error code:

    MalformedMessage   -32700  payload is not valid JSON
    InvalidRequest     -32600  JSON, but not a usable envelope
    MethodNotFound     -32601  unknown procedure
    UnknownTool        -32601  tools/call for a tool not in the registry
    InvalidArguments   -32602  missing or wrongly typed tool arguments
    ResolutionError    -32603  upstream Planka failure (and subclasses)

ProtocolViolation has no code: it is never answered, it ends the connection.
"""

from .mcp.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
)

# Upper bound on how much of an unexpected upstream body is echoed back
PREVIEW_LIMIT = 200


def body_preview(body: str | bytes | None) -> str:
    """Return a bounded, printable preview of a response body."""
    if not body:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body[:PREVIEW_LIMIT]


class PlankaMCPError(Exception):
    """Base class for all errors raised by this package."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedMessage(PlankaMCPError):
    """Inbound payload could not be decoded."""

    code = PARSE_ERROR


class InvalidRequest(PlankaMCPError):
    """Inbound payload decoded but is not a JSON-RPC request object."""

    code = INVALID_REQUEST


class MethodNotFound(PlankaMCPError):
    """Procedure name is not recognized."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str):
        super().__init__(f"Method not found: {method}")
        self.method = method


class UnknownTool(PlankaMCPError):
    """tools/call named a tool that is not registered."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArguments(PlankaMCPError):
    """Tool arguments failed the schema check."""

    code = INVALID_PARAMS


class ProtocolViolation(PlankaMCPError):
    """A duplex client called a procedure before initialize."""


class ResolutionError(PlankaMCPError):
    """A call against the Planka API failed.

    Carries the endpoint that was attempted and a bounded preview of whatever
    the service sent back, so callers can tell an unreachable service from one
    that answered with something unexpected.
    """

    code = INTERNAL_ERROR

    def __init__(self, message: str, endpoint: str = "", preview: str = ""):
        if endpoint:
            message = f"{message} [endpoint: {endpoint}]"
        if preview:
            message = f"{message}. Response preview: {preview}"
        super().__init__(message)
        self.endpoint = endpoint
        self.preview = preview


class UpstreamUnavailable(ResolutionError):
    """Network failure or timeout talking to Planka."""


class UpstreamStatusError(ResolutionError):
    """Planka answered with a status >= 400."""

    def __init__(self, status_code: int, endpoint: str = "", preview: str = ""):
        super().__init__(f"API error (status {status_code})", endpoint, preview)
        self.status_code = status_code


class UnexpectedResponse(ResolutionError):
    """Planka answered 2xx but the body is HTML, not JSON, or the wrong shape."""


class ConfigurationError(PlankaMCPError):
    """Startup configuration is incomplete."""
