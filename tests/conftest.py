"""Shared fixtures: an in-memory Planka served through httpx.MockTransport."""

import json
from typing import Any

import httpx
import pytest

from planka_mcp.engine.handlers import HandlerContext
from planka_mcp.mcp.dispatcher import Dispatcher
from planka_mcp.mcp.registry import ToolRegistry
from planka_mcp.services import PlankaClient, PlankaResolver

PLANKA_URL = "http://planka.test"
TOKEN = "test-token"


class FakePlanka:
    """Canned Planka responses keyed by (method, path), with a request log."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        text: str | None = None,
    ) -> None:
        if text is not None:
            response = httpx.Response(status, text=text)
        else:
            response = httpx.Response(status, json=json_body)
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"code": "E_NOT_FOUND", "message": "Not found"})
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers=response.headers,
        )

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def planka() -> FakePlanka:
    return FakePlanka()


@pytest.fixture
def client(planka: FakePlanka) -> PlankaClient:
    return PlankaClient(PLANKA_URL, TOKEN, transport=httpx.MockTransport(planka.handler))


@pytest.fixture
def resolver(client: PlankaClient) -> PlankaResolver:
    return PlankaResolver(client)


@pytest.fixture
def registry(resolver: PlankaResolver) -> ToolRegistry:
    return ToolRegistry(HandlerContext(resolver=resolver))


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> Dispatcher:
    return Dispatcher(registry)
