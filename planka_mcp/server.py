"""FastAPI MCP Server for Planka.

Serves the MCP JSON-RPC protocol over HTTP (``POST /mcp`` and ``POST /``) or
over stdio, backed by a Planka instance.
"""

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import TextIO

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import SERVER_NAME, Settings, settings
from .engine.handlers import HandlerContext
from .exceptions import ConfigurationError, InvalidRequest, MalformedMessage, ResolutionError
from .mcp import INTERNAL_ERROR, jsonrpc_error
from .mcp.codec import decode_payload, request_id_of, to_request
from .mcp.dispatcher import Dispatcher
from .mcp.jsonrpc import jsonrpc_error_from
from .mcp.registry import ToolRegistry
from .mcp.sessions import SessionTracker, http_session_key
from .mcp.stdio_transport import EXIT_OK, EXIT_TERMINATED, run_stdio
from .middleware import CORSMiddleware
from .services import PlankaClient, PlankaResolver
from .services.diagnostics import run_checks

logger = logging.getLogger(__name__)


async def build_planka_client(
    config: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> PlankaClient:
    """Build an authenticated Planka client from settings.

    A pre-issued token wins; otherwise the username/password pair is
    exchanged for a token once, here.

    Raises:
        ConfigurationError: if the Planka connection is not configured
        ResolutionError: if the password exchange fails
    """
    config.require_planka()
    if config.planka_token:
        return PlankaClient(
            config.planka_url,
            config.planka_token,
            timeout=config.planka_timeout,
            transport=transport,
        )
    return await PlankaClient.login(
        config.planka_url,
        config.planka_username,
        config.planka_password,
        timeout=config.planka_timeout,
        transport=transport,
    )


def build_dispatcher(client: PlankaClient) -> Dispatcher:
    context = HandlerContext(resolver=PlankaResolver(client))
    return Dispatcher(ToolRegistry(context))


def create_app(client: PlankaClient | None = None) -> FastAPI:
    """Create the HTTP application.

    Args:
        client: Planka client to use. When omitted, one is built from
            settings at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info(f"Starting Planka MCP Server v{__version__}")

        if not settings.debug and settings.mcp_cors_allowed_origins == "*":
            logger.warning(
                "CORS is configured to allow all origins ('*'). "
                "Set MCP_CORS_ALLOWED_ORIGINS to specific domains in production."
            )

        owned = client is None
        planka = client if client is not None else await build_planka_client(settings)
        app.state.dispatcher = build_dispatcher(planka)
        app.state.sessions = SessionTracker(idle_ttl=settings.mcp_session_idle_ttl)

        yield
        # Shutdown
        if owned:
            await planka.aclose()

    app = FastAPI(
        title="Planka MCP Server",
        description="MCP endpoint exposing Planka projects, boards, lists, cards and tasks",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS headers on every response, OPTIONS answered directly
    app.add_middleware(CORSMiddleware)

    # ============ EXCEPTION HANDLERS ============

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with a JSON-RPC shaped error."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=jsonrpc_error(None, INTERNAL_ERROR, "Internal error"),
        )

    # ============ HEALTH ENDPOINTS ============

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint (lightweight liveness check)."""
        return {"status": "ok", "service": SERVER_NAME}

    # ============ MCP ENDPOINTS ============

    @app.post("/mcp", tags=["MCP"])
    @app.post("/", tags=["MCP"])
    async def mcp_endpoint(request: Request):
        """
        MCP endpoint (JSON-RPC format).

        The session is identified by the X-Session-Token header, else the
        Mcp-Session-Id header, else the caller's host and User-Agent. Calls on
        a session that never sent initialize are served anyway.
        """
        try:
            payload = decode_payload(await request.body())
        except MalformedMessage as e:
            return JSONResponse(jsonrpc_error_from(None, e), status_code=400)

        try:
            rpc_request = to_request(payload)
        except InvalidRequest as e:
            return JSONResponse(jsonrpc_error_from(request_id_of(payload), e))

        key = http_session_key(request.headers, request.client.host if request.client else None)
        session = await request.app.state.sessions.get_or_create(key)
        response = await request.app.state.dispatcher.handle(rpc_request, session, lenient=True)
        return JSONResponse(response)

    return app


# For `uvicorn planka_mcp.server:app`
app = create_app()


# ============ MAIN ============


async def _serve_stdio() -> int:
    async with await build_planka_client(settings) as planka:
        return await run_stdio(build_dispatcher(planka))


async def check_planka(
    config: Settings,
    out: TextIO,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Authenticate, then walk the Planka graph read-only, reporting to ``out``.

    Returns:
        EXIT_OK if every step passed, EXIT_TERMINATED otherwise
    """
    method = "token" if config.planka_token else "username/password"
    print(f"Checking Planka at {config.planka_url}", file=out)
    print(f"\nAuthenticating with {method}...", file=out)
    try:
        planka = await build_planka_client(config, transport=transport)
    except ResolutionError as e:
        print(f"  FAILED: {e.message}", file=out)
        return EXIT_TERMINATED
    print("  ok: authenticated", file=out)

    async with planka:
        passed = await run_checks(PlankaResolver(planka), out)

    print("\nAll checks passed" if passed else "\nChecks failed", file=out)
    return EXIT_OK if passed else EXIT_TERMINATED


def main():
    """Run the server over stdio (default) or HTTP with uvicorn.

    ``planka-mcp test`` runs the connectivity check instead of serving.
    """
    parser = argparse.ArgumentParser(description="Planka MCP server")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["test"],
        help="'test' checks the Planka connection and exits",
    )
    parser.add_argument(
        "--http",
        action="store_true",
        help="Serve MCP over HTTP instead of stdio",
    )
    parser.add_argument(
        "--http-port",
        type=int,
        default=settings.mcp_http_port,
        help=f"HTTP port (default: {settings.mcp_http_port})",
    )
    parser.add_argument(
        "--http-addr",
        type=str,
        default=settings.mcp_http_host,
        help=f"HTTP bind address (default: {settings.mcp_http_host})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level.upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.log_level.upper()})",
    )
    args = parser.parse_args()

    # stdout is the protocol channel in stdio mode
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings.require_planka()
    except ConfigurationError as e:
        parser.error(e.message)

    if args.command == "test":
        sys.exit(asyncio.run(check_planka(settings, sys.stdout)))

    if args.http:
        import uvicorn

        logger.info(f"Serving MCP over HTTP on {args.http_addr}:{args.http_port} (POST /mcp)")
        uvicorn.run(
            app,
            host=args.http_addr,
            port=args.http_port,
            log_level=args.log_level.lower(),
        )
        return

    try:
        status = asyncio.run(_serve_stdio())
    except ResolutionError as e:
        logger.error(f"Could not connect to Planka: {e.message}")
        status = EXIT_TERMINATED
    except KeyboardInterrupt:
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    main()
