# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-04
"""
Dashboard session.

Application-scoped owner of the data-access layer: one HTTP client, one
resource cache and one preference store per signed-in session. Logging out
is close(), which drops cached reference data and closes the client.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Self

import httpx

from dashboard_access.cache import ResourceCache
from dashboard_access.config import DashboardConfig
from dashboard_access.exception import RetryContext, RetryPolicy
from dashboard_access.exception.retry import Sleep
from dashboard_access.log import bind_log_context
from dashboard_access.preferences import NotificationPreferencesApi, PreferenceStore
from dashboard_access.reference import ReferenceDataService
from dashboard_access.transport import ApiClient
from dashboard_access.transport.client import TokenProvider, TokenRefresher

logger = logging.getLogger(__name__)


class DashboardSession:
    """
    Wires the data-access components together.

    Example:
    ```python
    async with DashboardSession(dashboard_configure()) as session:
        zones = await session.reference.timezones()
        await session.preferences.set_channel("billing", "push", True)
    ```
    """

    def __init__(
        self,
        config: DashboardConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        token_provider: TokenProvider | None = None,
        token_refresher: TokenRefresher | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.config = config or DashboardConfig()
        self.session_id = uuid.uuid4().hex[:12]

        self.client = ApiClient(
            self.config.api,
            transport=transport,
            token_provider=token_provider,
            token_refresher=token_refresher,
        )
        self.cache = ResourceCache()
        self.retry_context = RetryContext.from_config(self.config.retry)
        self.retry_policy = RetryPolicy(sleep=sleep, default_context=self.retry_context)

        self.reference = ReferenceDataService(
            self.client,
            self.cache,
            self.retry_policy,
            self.retry_context,
        )
        self.notifications = NotificationPreferencesApi(
            self.client,
            self.retry_policy,
            self.retry_context,
        )
        self.preferences = PreferenceStore(
            self.notifications.update_channel,
            loader=self.notifications.list_preferences,
            rollback=self.config.preferences.rollback,
        )

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> None:
        with bind_log_context(session_id=self.session_id):
            logger.info("Dashboard session started: base_url=%s", self.config.api.base_url)
            if self.config.cache.preload_on_start:
                await self.reference.preload_all()

    async def close(self) -> None:
        """Logout: drop cached data and close the HTTP client."""
        with bind_log_context(session_id=self.session_id):
            self.cache.clear()
            if not self.client.is_closed:
                await self.client.aclose()
            logger.info("Dashboard session closed")
