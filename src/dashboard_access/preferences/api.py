# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-03
"""
Notification preference endpoints.

Both calls go through RetryPolicy.execute_classified, so callers only ever see
ApiError. Updates send a per-channel delta rather than the whole record.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from dashboard_access.exception import RetryContext, RetryPolicy, UnknownApiError
from dashboard_access.preferences.models import ChannelUpdate, PreferenceRecord
from dashboard_access.transport import ApiClient, endpoints

logger = logging.getLogger(__name__)

_RECORD_LIST = TypeAdapter(list[PreferenceRecord])


class NotificationPreferencesApi:
    """Backend access for notification preferences."""

    def __init__(
        self,
        client: ApiClient,
        retry_policy: RetryPolicy | None = None,
        retry_context: RetryContext | None = None,
    ) -> None:
        self._client = client
        self._retry = retry_policy or RetryPolicy()
        self._context = retry_context

    async def list_preferences(self) -> list[PreferenceRecord]:
        async def list_notification_preferences() -> Any:
            return await self._client.get(endpoints.NOTIFICATIONS)

        payload = await self._retry.execute_classified(list_notification_preferences, self._context)
        if payload is None:
            return []
        try:
            return _RECORD_LIST.validate_python(payload)
        except ValidationError as e:
            raise UnknownApiError(
                "Unexpected notification preferences payload",
                status=200,
                cause=e,
            ) from e

    async def update_channel(self, update: ChannelUpdate) -> PreferenceRecord | None:
        """
        PATCH one channel of one type.

        Returns:
            The record as confirmed by the backend, or None when the response
            carries no usable record
        """
        path = endpoints.notification_by_type(update.type)

        async def update_notification_channel() -> Any:
            return await self._client.patch(path, json=update.body())

        payload = await self._retry.execute_classified(update_notification_channel, self._context)
        if not isinstance(payload, dict):
            return None
        try:
            return PreferenceRecord.model_validate(payload)
        except ValidationError:
            logger.debug("Update response is not a preference record: type=%s", update.type)
            return None
