# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-03
"""
Notification preference store.

Owns the in-memory preference collection and is its only writer. Updates are
optimistic and field-scoped: setting one channel of one record produces a new
record that differs only in that flag, and only that record is replaced in the
collection. Sibling records keep their object identity.

A failed persist leaves the optimistic value in place under RollbackPolicy.KEEP
and restores the previous value of that one channel under RollbackPolicy.REVERT,
unless a newer update for the same channel has been issued since.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable

from dashboard_access.exception import ApiError
from dashboard_access.preferences.models import (
    Channel,
    ChannelUpdate,
    PreferenceRecord,
    RollbackPolicy,
    default_record,
    default_records,
)

logger = logging.getLogger(__name__)

Persist = Callable[[ChannelUpdate], Awaitable[PreferenceRecord | None]]
Loader = Callable[[], Awaitable[list[PreferenceRecord]]]


class PreferenceStore:
    """
    Multi-channel preference collection keyed by type.

    Example:
    ```python
    store = PreferenceStore(api.update_channel, loader=api.list_preferences)
    await store.refresh()
    ok = await store.set_channel("billing", "push", True)
    ```
    """

    def __init__(
        self,
        persist: Persist,
        *,
        loader: Loader | None = None,
        rollback: RollbackPolicy = RollbackPolicy.KEEP,
    ) -> None:
        self._persist = persist
        self._loader = loader
        self.rollback = RollbackPolicy(rollback)
        self._records: dict[str, PreferenceRecord] = {}
        # Latest issued update per (type, channel); stale outcomes must not win.
        self._versions: dict[tuple[str, Channel], int] = {}
        self.last_error: ApiError | None = None

    @property
    def records(self) -> tuple[PreferenceRecord, ...]:
        return tuple(self._records.values())

    def get(self, notification_type: str) -> PreferenceRecord | None:
        return self._records.get(notification_type)

    def is_enabled(self, notification_type: str, channel: Channel | str) -> bool:
        record = self._records.get(notification_type)
        if record is None:
            return False
        return record.enabled(channel)

    def replace_all(self, records: Iterable[PreferenceRecord]) -> None:
        """Replace the whole collection with backend state."""
        collection: dict[str, PreferenceRecord] = {}
        for record in records:
            if record.type in collection:
                logger.warning("Duplicate preference type from backend, keeping last: %s", record.type)
            collection[record.type] = record
        self._records = collection
        self._versions.clear()

    async def refresh(self) -> bool:
        """
        Reload every record through the loader.

        On failure an empty store is seeded with the default records so the
        UI still has something to render.
        """
        if self._loader is None:
            raise RuntimeError("PreferenceStore has no loader")
        try:
            records = await self._loader()
        except ApiError as e:
            self.last_error = e
            if not self._records:
                self.replace_all(default_records())
                logger.warning(
                    f"[PreferenceStore] Load failed, using defaults | kind={e.kind.value} | error={e}"
                )
            else:
                logger.warning(
                    f"[PreferenceStore] Load failed, keeping local state | kind={e.kind.value} | error={e}"
                )
            return False

        self.replace_all(records)
        self.last_error = None
        return True

    async def set_channel(
        self,
        notification_type: str,
        channel: Channel | str,
        enabled: bool,
    ) -> bool:
        """
        Set one channel of one record and persist it.

        Returns:
            True if the backend accepted the change
        """
        if not isinstance(notification_type, str) or not notification_type.strip():
            raise ValueError(f"Invalid notification type: {notification_type!r}")
        channel = Channel.parse(channel)
        enabled = bool(enabled)

        current = self._records.get(notification_type) or default_record(notification_type)
        previous = current.enabled(channel)
        updated = current.with_channel(channel, enabled)
        self._put(updated)

        slot = (notification_type, channel)
        version = self._versions.get(slot, 0) + 1
        self._versions[slot] = version

        update = ChannelUpdate(
            type=notification_type,
            channel=channel,
            enabled=enabled,
            record=updated,
        )
        try:
            confirmed = await self._persist(update)
        except ApiError as e:
            self.last_error = e
            logger.warning(
                f"[PreferenceStore] Persist failed | type={notification_type} | "
                f"channel={channel.value} | kind={e.kind.value} | rollback={self.rollback.value}"
            )
            if self.rollback == RollbackPolicy.REVERT and self._is_latest(slot, version):
                self._set_flag(notification_type, channel, previous)
            return False

        if confirmed is not None and confirmed.type == notification_type and self._is_latest(slot, version):
            self._set_flag(notification_type, channel, confirmed.enabled(channel))
        return True

    def _is_latest(self, slot: tuple[str, Channel], version: int) -> bool:
        return self._versions.get(slot) == version

    def _set_flag(self, notification_type: str, channel: Channel, enabled: bool) -> None:
        record = self._records.get(notification_type)
        if record is None or record.enabled(channel) == enabled:
            return
        self._put(record.with_channel(channel, enabled))

    def _put(self, record: PreferenceRecord) -> None:
        # New mapping, same objects for every other type.
        self._records = {**self._records, record.type: record}
