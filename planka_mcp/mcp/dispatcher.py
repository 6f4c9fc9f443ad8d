"""MCP protocol state machine.

Each session starts out awaiting ``initialize`` and becomes ready once, for
good. How a call that arrives before ``initialize`` is treated depends on the
transport:

- duplex (stdio): the connection is broken off with ProtocolViolation
- HTTP (``lenient``): the session is promoted to ready on the spot, since
  independent requests cannot carry a handshake

Everything else a handler raises becomes an error envelope; the connection
is never torn down by a failing tool.
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..config import PROTOCOL_VERSION, SERVER_NAME, settings
from ..exceptions import (
    InvalidArguments,
    MethodNotFound,
    PlankaMCPError,
    ProtocolViolation,
    ResolutionError,
)
from ..models.jsonrpc import InitializeParams, JsonRpcRequest, ToolCallParams
from .jsonrpc import INTERNAL_ERROR, jsonrpc_error, jsonrpc_error_from, jsonrpc_response
from .registry import ToolRegistry
from .sessions import Session

logger = logging.getLogger(__name__)

METHOD_INITIALIZE = "initialize"
METHOD_INITIALIZED = "notifications/initialized"
METHOD_PING = "ping"
METHOD_TOOLS_LIST = "tools/list"
METHOD_TOOLS_CALL = "tools/call"

# Accepted in any lifecycle state
LIFECYCLE_METHODS = frozenset({METHOD_INITIALIZE, METHOD_INITIALIZED})


def server_info() -> dict[str, Any]:
    """Result payload of ``initialize``."""
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {"tools": {}},
        "serverInfo": {"name": SERVER_NAME, "version": settings.server_version},
    }


class Dispatcher:
    """Routes decoded requests to lifecycle procedures and the tool registry."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def handle(self, request: JsonRpcRequest, session: Session, *, lenient: bool) -> dict:
        """Handle one request and build its response envelope.

        Args:
            request: Decoded request
            session: Session the request belongs to
            lenient: Promote an uninitialized session instead of failing

        Returns:
            A response envelope echoing ``request.id``. Whether it is sent for
            a notification is up to the transport.

        Raises:
            ProtocolViolation: a non-lifecycle call on an uninitialized,
                non-lenient session
        """
        logger.debug(f"Session {session.key!r}: {request.method}")
        try:
            result = await self._route(request, session, lenient)
        except ProtocolViolation:
            raise
        except ResolutionError as e:
            logger.warning(f"{request.method} failed upstream: {e.message}")
            return jsonrpc_error_from(request.id, e)
        except PlankaMCPError as e:
            return jsonrpc_error_from(request.id, e)
        except Exception as e:
            logger.exception(f"Unexpected error handling {request.method}")
            return jsonrpc_error(request.id, INTERNAL_ERROR, str(e) or e.__class__.__name__)
        return jsonrpc_response(request.id, result)

    async def _route(self, request: JsonRpcRequest, session: Session, lenient: bool) -> Any:
        method = request.method
        params = request.params or {}

        if method == METHOD_INITIALIZE:
            return await self._initialize(params, session)
        if method == METHOD_INITIALIZED:
            return None

        if not session.initialized:
            if not lenient:
                raise ProtocolViolation(f"Received {method} before initialize")
            if await session.mark_initialized():
                logger.debug(f"Session {session.key!r} promoted to ready by {method}")

        if method == METHOD_PING:
            return {}
        elif method == METHOD_TOOLS_LIST:
            return {"tools": self.registry.list()}
        elif method == METHOD_TOOLS_CALL:
            return await self._call_tool(params)
        else:
            raise MethodNotFound(method)

    async def _initialize(self, params: dict[str, Any], session: Session) -> dict[str, Any]:
        try:
            init = InitializeParams.model_validate(params)
        except ValidationError as e:
            raise InvalidArguments(f"Invalid initialize params: {e.error_count()} error(s)") from e

        if await session.mark_initialized():
            client = (init.client_info or {}).get("name", "unknown client")
            logger.info(
                f"Session {session.key!r} initialized by {client} "
                f"(protocol {init.protocol_version or 'unspecified'})"
            )
        return server_info()

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError as e:
            raise InvalidArguments("Invalid params: tools/call requires a string 'name'") from e

        text = await self.registry.dispatch(call.name, call.arguments)
        return {"content": [{"type": "text", "text": text}]}
