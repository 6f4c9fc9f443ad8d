"""Authenticated HTTP client for the Planka REST API.

Every call goes through one ``httpx.AsyncClient`` with a fixed timeout.
Failures are classified before they leave this module:

- UpstreamUnavailable: the request never got an answer (network, timeout)
- UpstreamStatusError: Planka answered with status >= 400
- UnexpectedResponse: Planka answered 2xx with an HTML page or a body that
  is not JSON

All of them carry the endpoint and a bounded preview of the body.
"""

import json
import logging
from typing import Any

import httpx

from ..exceptions import (
    ResolutionError,
    UnexpectedResponse,
    UpstreamStatusError,
    UpstreamUnavailable,
    body_preview,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
LOGIN_ENDPOINT = "/api/access-tokens"


class PlankaClient:
    """Thin async wrapper over the Planka REST API."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    @classmethod
    async def login(
        cls,
        base_url: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "PlankaClient":
        """Build a client by exchanging a username/password pair for a token.

        The exchange happens once; the token is reused for every later call.

        Raises:
            ResolutionError: if the exchange fails or returns no token
        """
        client = cls(base_url, timeout=timeout, transport=transport)
        try:
            doc = await client._call(
                "POST",
                LOGIN_ENDPOINT,
                {"emailOrUsername": username, "password": password},
                auth=False,
            )
            token = doc.get("item") if isinstance(doc, dict) else None
            if not isinstance(token, str) or not token:
                raise UnexpectedResponse(
                    "login failed: no access token in response", LOGIN_ENDPOINT
                )
        except ResolutionError:
            await client.aclose()
            raise
        client._token = token
        logger.info(f"Obtained Planka access token for {client.base_url}")
        return client

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PlankaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ============ Verbs ============

    async def get(self, endpoint: str) -> Any:
        return await self._call("GET", endpoint)

    async def post(self, endpoint: str, body: dict[str, Any] | None = None) -> Any:
        return await self._call("POST", endpoint, body)

    async def patch(self, endpoint: str, body: dict[str, Any]) -> Any:
        return await self._call("PATCH", endpoint, body)

    async def delete(self, endpoint: str) -> None:
        """Issue a DELETE. The response body is discarded."""
        await self._send("DELETE", endpoint)

    # ============ Internals ============

    async def _call(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
        auth: bool = True,
    ) -> Any:
        response = await self._send(method, endpoint, body, auth=auth)
        return self._decode(response, endpoint)

    async def _send(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
        auth: bool = True,
    ) -> httpx.Response:
        headers = {}
        if auth and self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        logger.debug(f"Planka {method} {endpoint}")
        try:
            response = await self._client.request(method, endpoint, json=body, headers=headers)
        except httpx.TimeoutException as e:
            raise UpstreamUnavailable(f"request timed out: {e}", endpoint) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"request failed: {e}", endpoint) from e

        if response.status_code >= 400:
            raise UpstreamStatusError(
                response.status_code, endpoint, body_preview(response.content)
            )
        return response

    @staticmethod
    def _decode(response: httpx.Response, endpoint: str) -> Any:
        text = response.text
        # Planka serves its SPA shell for some routes instead of a JSON error
        if text.lstrip().startswith("<"):
            raise UnexpectedResponse("received HTML instead of JSON", endpoint, body_preview(text))
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise UnexpectedResponse(
                f"failed to decode JSON response: {e}", endpoint, body_preview(text)
            ) from e
