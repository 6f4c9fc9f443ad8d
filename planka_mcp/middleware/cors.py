"""Permissive CORS middleware.

Adds cross-origin headers to every HTTP response and answers OPTIONS on any
path directly, using pure ASGI pattern.
"""

from uuid import uuid4

from ..config import settings

ALLOW_METHODS = b"POST, GET, OPTIONS"
ALLOW_HEADERS = b"Content-Type, Authorization, X-Session-Token, Mcp-Session-Id"


class CORSMiddleware:
    """
    Add CORS headers to all responses and short-circuit OPTIONS.

    Unlike Starlette's CORSMiddleware, OPTIONS is answered with 200 and an
    empty body whether or not the request is a well-formed preflight, so
    browser-based MCP clients always see the headers.

    Headers added:
        - Access-Control-Allow-Origin: "*", or the caller's Origin when it is
          in the allowed list (else the first allowed origin)
        - Access-Control-Allow-Methods: POST, GET, OPTIONS
        - Access-Control-Allow-Headers: Content-Type, Authorization,
          X-Session-Token, Mcp-Session-Id
        - X-Request-Id: Unique request identifier for tracing
    """

    def __init__(self, app, allowed_origins: list[str] | None = None):
        self.app = app
        if allowed_origins is None:
            allowed_origins = settings.cors_origins_list
        self.allowed_origins = allowed_origins

    def _allow_origin(self, scope) -> bytes:
        if not self.allowed_origins or "*" in self.allowed_origins:
            return b"*"
        for name, value in scope.get("headers", []):
            if name == b"origin":
                if value.decode("latin-1") in self.allowed_origins:
                    return value
                break
        return self.allowed_origins[0].encode()

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid4())
        cors_headers = [
            (b"access-control-allow-origin", self._allow_origin(scope)),
            (b"access-control-allow-methods", ALLOW_METHODS),
            (b"access-control-allow-headers", ALLOW_HEADERS),
            (b"x-request-id", request_id.encode()),
        ]

        if scope["method"] == "OPTIONS":
            await send({
                "type": "http.response.start",
                "status": 200,
                "headers": [(b"content-length", b"0"), *cors_headers],
            })
            await send({"type": "http.response.body", "body": b""})
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.extend(cors_headers)
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_headers)
