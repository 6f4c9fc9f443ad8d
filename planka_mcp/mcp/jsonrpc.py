"""JSON-RPC 2.0 envelope builders.

Responses always carry exactly one of ``result`` or ``error`` and echo the
request's ``id`` unchanged (``None`` when the request had none or could not be
parsed).

See: https://www.jsonrpc.org/specification
"""

from typing import Any

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Create a JSON-RPC 2.0 success response.

    ``result`` may be ``None``; that is still a success (used to acknowledge
    notifications over HTTP).
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Create a JSON-RPC 2.0 error response.

    Args:
        id: Request ID (None for parse errors)
        code: Error code (negative integer)
        message: Human-readable error message
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "error": {"code": code, "message": message}}


def jsonrpc_error_from(id: Any, exc: BaseException) -> dict:
    """Build an error response from an exception.

    Exceptions from ``planka_mcp.exceptions`` carry their own ``code``;
    anything else is reported as an internal error.
    """
    code = getattr(exc, "code", INTERNAL_ERROR)
    message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
    return jsonrpc_error(id, code, message)
