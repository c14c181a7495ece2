"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from campusnet.config import get_settings
from campusnet.domain.entities import (
    DeliveryStatus,
    Notification,
    NotificationPriority,
    NotificationSender,
    NotificationType,
)
from campusnet.infrastructure.key_value import (
    CorruptValueError,
    KeyValueStore,
    KeyValueStoreError,
)
from campusnet.utils import format_iso_datetime, parse_iso_datetime

logger = logging.getLogger(__name__)

# Serializes read-modify-write cycles within this process only.
_COLLECTION_LOCK = threading.RLock()

_KNOWN_KEYS = frozenset(
    {
        "id",
        "userId",
        "type",
        "title",
        "message",
        "timestamp",
        "read",
        "priority",
        "from",
        "link",
        "scheduledFor",
        "targetGroup",
        "deliveryStatus",
        "pinned",
    }
)


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a write against the notification collection."""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> "StoreResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "StoreResult":
        return cls(ok=False, reason=reason)


@dataclass
class NotificationSnapshot:
    """Collection loaded for a mutation.

    ``unreadable`` holds stored records that could not be decoded; they are
    written back verbatim by :meth:`NotificationStore.save`.
    """

    notifications: list[Notification]
    unreadable: list[Any] = field(default_factory=list)


class NotificationStore:
    """Flat collection of every user's notifications under one storage key.

    Display reads go through :meth:`get_all`, which never raises. Mutations
    read with :meth:`load`, change the snapshot in memory and write it back
    with :meth:`save`. Only one writer is expected at a time.
    """

    def __init__(self, kv_store: KeyValueStore, *, key: str | None = None) -> None:
        self.kv_store = kv_store
        self.key = key or get_settings().notifications_key

    def mutation(self) -> threading.RLock:
        """Return the lock guarding read-modify-write cycles in this process."""

        return _COLLECTION_LOCK

    def get_all(self) -> list[Notification]:
        """Return every stored notification, or ``[]`` if the data is unusable."""

        try:
            return self.load().notifications
        except KeyValueStoreError as exc:
            logger.warning("Notification collection unavailable, reading as empty: %s", exc)
            return []

    def load(self) -> NotificationSnapshot:
        """Read the collection for a mutation.

        Raises :class:`KeyValueStoreError` when the storage cannot be read or
        the stored value is not a list, so callers never overwrite data they
        could not see.
        """

        raw = self.kv_store.get(self.key)
        if raw is None:
            return NotificationSnapshot(notifications=[])
        if not isinstance(raw, list):
            raise CorruptValueError(f"Notification collection under '{self.key}' is not a list")

        snapshot = NotificationSnapshot(notifications=[])
        for record in raw:
            try:
                snapshot.notifications.append(self._to_entity(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Keeping undecodable notification record as stored: %s", exc)
                snapshot.unreadable.append(record)
        return snapshot

    def save(self, snapshot: NotificationSnapshot) -> StoreResult:
        """Write ``snapshot`` back, undecodable records included."""

        records = [self._to_record(notification) for notification in snapshot.notifications]
        return self._write([*records, *snapshot.unreadable])

    def append(self, notifications: Sequence[Notification]) -> StoreResult:
        """Add ``notifications`` to the stored collection.

        Nothing is written when the current collection cannot be read.
        """

        with self.mutation():
            try:
                snapshot = self.load()
            except KeyValueStoreError as exc:
                logger.warning("Append aborted, notification collection unreadable: %s", exc)
                return StoreResult.failure(str(exc))
            snapshot.notifications.extend(notifications)
            return self.save(snapshot)

    def replace_all(self, notifications: Iterable[Notification]) -> StoreResult:
        """Overwrite the whole collection with ``notifications``."""

        return self._write([self._to_record(notification) for notification in notifications])

    def _write(self, records: list[Any]) -> StoreResult:
        try:
            self.kv_store.set(self.key, records)
        except KeyValueStoreError as exc:
            logger.warning(
                "Dropped write of %d notifications to '%s': %s", len(records), self.key, exc
            )
            return StoreResult.failure(str(exc))
        return StoreResult.success()

    def get_for_user(self, user_id: str) -> list[Notification]:
        """Return ``user_id``'s notifications, newest first."""

        return sort_newest_first(
            notification
            for notification in self.get_all()
            if notification.user_id == user_id
        )

    def clear(self) -> StoreResult:
        """Remove the whole collection."""

        try:
            self.kv_store.remove(self.key)
        except KeyValueStoreError as exc:
            logger.warning("Could not clear notifications under '%s': %s", self.key, exc)
            return StoreResult.failure(str(exc))
        return StoreResult.success()

    @staticmethod
    def _to_record(notification: Notification) -> dict[str, Any]:
        record: dict[str, Any] = dict(notification.extra)
        record.update(
            {
                "id": notification.id,
                "userId": notification.user_id,
                "type": notification.type.value,
                "title": notification.title,
                "message": notification.message,
                "timestamp": format_iso_datetime(notification.timestamp),
                "read": notification.read,
                "priority": notification.priority.value,
                "deliveryStatus": notification.delivery_status.value,
                "pinned": notification.pinned,
            }
        )
        if notification.sender is not None:
            sender: dict[str, Any] = {
                "id": notification.sender.id,
                "name": notification.sender.name,
            }
            if notification.sender.avatar is not None:
                sender["avatar"] = notification.sender.avatar
            record["from"] = sender
        if notification.link is not None:
            record["link"] = notification.link
        if notification.scheduled_for is not None:
            record["scheduledFor"] = format_iso_datetime(notification.scheduled_for)
        if notification.target_group is not None:
            record["targetGroup"] = notification.target_group
        return record

    @staticmethod
    def _to_entity(record: dict[str, Any]) -> Notification:
        timestamp = parse_iso_datetime(record["timestamp"])
        if timestamp is None:
            raise ValueError("Notification timestamp is required")

        extra = {key: value for key, value in record.items() if key not in _KNOWN_KEYS}
        sender_data = record.get("from")
        sender = None
        if isinstance(sender_data, dict):
            sender = NotificationSender(
                id=str(sender_data["id"]),
                name=str(sender_data.get("name", "")),
                avatar=sender_data.get("avatar"),
            )
        elif sender_data is not None:
            extra["from"] = sender_data

        scheduled_for = parse_iso_datetime(record.get("scheduledFor"))
        default_status = DeliveryStatus.PENDING if scheduled_for else DeliveryStatus.DELIVERED
        return Notification(
            id=str(record["id"]),
            user_id=str(record["userId"]),
            type=NotificationType(record["type"]),
            title=str(record.get("title", "")),
            message=str(record.get("message", "")),
            timestamp=timestamp,
            read=bool(record.get("read", False)),
            priority=NotificationPriority(record.get("priority") or NotificationPriority.MEDIUM),
            sender=sender,
            link=record.get("link"),
            scheduled_for=scheduled_for,
            target_group=record.get("targetGroup"),
            delivery_status=DeliveryStatus(record.get("deliveryStatus") or default_status),
            pinned=bool(record.get("pinned", False)),
            extra=extra,
        )


def sort_newest_first(notifications: Iterable[Notification]) -> list[Notification]:
    """Return ``notifications`` ordered by timestamp, most recent first."""

    return sorted(notifications, key=lambda notification: notification.timestamp, reverse=True)


def find_by_id(
    notifications: Sequence[Notification], notification_id: str
) -> Notification | None:
    """Return the notification with ``notification_id`` or ``None``."""

    for notification in notifications:
        if notification.id == notification_id:
            return notification
    return None


__all__ = [
    "NotificationSnapshot",
    "NotificationStore",
    "StoreResult",
    "find_by_id",
    "sort_newest_first",
]
