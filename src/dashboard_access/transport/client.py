# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Backend HTTP client.

Thin wrapper over httpx.AsyncClient. Failures are raised raw (httpx errors);
classification and retry happen above this layer.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, Self

import httpx

from dashboard_access.log import bind_log_context
from dashboard_access.transport.config import ApiConfig
from dashboard_access.transport.envelope import unwrap_envelope

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]
TokenRefresher = Callable[[], Awaitable[str]]


class ApiClient:
    """
    Backend API client.

    Example:
    ```python
    async with ApiClient(ApiConfig(base_url="https://api.example.com")) as client:
        sizes = await client.get("/company-sizes")
    ```
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        token_provider: TokenProvider | None = None,
        token_refresher: TokenRefresher | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Base URL, timeout and default headers
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
            token_provider: Returns the current bearer token, if any
            token_refresher: Obtains a new token after a 401; called at most
                once per request, concurrent refreshes share one call
        """
        self.config = config or ApiConfig()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers=self.config.headers,
            transport=transport,
        )
        self._token_provider = token_provider
        self._token_refresher = token_refresher
        self._refresh_task: asyncio.Task[str] | None = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """
        Send a request and return the unwrapped payload.

        Raises:
            httpx.HTTPStatusError: Non-2xx response or failure envelope
            httpx.RequestError: No response (timeout, connection failure)
        """
        method = method.upper()
        with bind_log_context(method=method, path=path, request_id=uuid.uuid4().hex[:12]):
            token = self._token_provider() if self._token_provider else None
            response = await self._send(method, path, params=params, json=json, token=token)

            if response.status_code == 401 and self._token_refresher is not None:
                try:
                    token = await self.refresh_token()
                except Exception as e:
                    logger.warning(f"[ApiClient] Token refresh failed | error={e!r}")
                else:
                    response = await self._send(method, path, params=params, json=json, token=token)

            response.raise_for_status()
            return unwrap_envelope(self._decode(response), response)

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def refresh_token(self) -> str:
        """Obtain a new bearer token; concurrent callers share one refresh."""
        if self._token_refresher is None:
            raise RuntimeError("No token refresher configured")
        if self._refresh_task is None:
            self._refresh_task = asyncio.create_task(self._run_refresh())
        return await asyncio.shield(self._refresh_task)

    async def _run_refresh(self) -> str:
        try:
            token = await self._token_refresher()
            if not token:
                raise ValueError("No access token in refresh response")
            logger.info("[ApiClient] Access token refreshed")
            return token
        finally:
            self._refresh_task = None

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None,
        json: Any,
        token: str | None,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        response = await self._client.request(
            method,
            path,
            params=params,
            json=json,
            headers=headers,
        )
        logger.debug("%s %s -> %s", method, path, response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
