"""Administrative listing, editing and removal of notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from campusnet.domain.entities import (
    DeliveryStatus,
    Notification,
    NotificationPriority,
    NotificationType,
)
from campusnet.infrastructure.key_value import StorageUnavailableError
from campusnet.infrastructure.repositories import NotificationStore, StoreResult
from campusnet.infrastructure.repositories.notification_store import (
    find_by_id,
    sort_newest_first,
)

from .dispatch import coerce_enum

logger = logging.getLogger(__name__)


class NotificationStatusFilter(str, Enum):
    """Status values accepted by the admin listing."""

    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"
    READ = "read"
    UNREAD = "unread"


@dataclass
class NotificationFilters:
    """Optional criteria combined with AND by :func:`list_admin_notifications`."""

    type: NotificationType | None = None
    priority: NotificationPriority | None = None
    target_group: str | None = None
    status: NotificationStatusFilter | None = None

    def matches(self, notification: Notification) -> bool:
        if self.type is not None and notification.type is not self.type:
            return False
        if self.priority is not None and notification.priority is not self.priority:
            return False
        if self.target_group is not None and notification.target_group != self.target_group:
            return False
        if self.status is NotificationStatusFilter.READ:
            return notification.read
        if self.status is NotificationStatusFilter.UNREAD:
            return not notification.read
        if self.status is not None:
            return notification.delivery_status is DeliveryStatus(self.status.value)
        return True


def list_admin_notifications(
    store: NotificationStore, filters: NotificationFilters | None = None
) -> list[Notification]:
    """Return every user's notifications matching ``filters``, newest first."""

    filters = filters or NotificationFilters()
    return sort_newest_first(
        notification for notification in store.get_all() if filters.matches(notification)
    )


def get_unread_count(store: NotificationStore, user_id: str) -> int:
    """Return how many of ``user_id``'s notifications are unread."""

    return sum(1 for notification in store.get_for_user(user_id) if not notification.read)


def order_for_display(notifications: Iterable[Notification]) -> list[Notification]:
    """Pinned notifications first, each block newest first."""

    newest_first = sort_newest_first(notifications)
    return sorted(newest_first, key=lambda notification: not notification.pinned)


def update_notification(
    store: NotificationStore,
    notification_id: str,
    *,
    title: str | None = None,
    message: str | None = None,
    priority: NotificationPriority | str | None = None,
    type: NotificationType | str | None = None,
    link: str | None = None,
    pinned: bool | None = None,
) -> Notification | None:
    """Edit the content fields of a notification.

    Identity, recipient, timestamp, read state and delivery status are not
    editable. Returns ``None`` when ``notification_id`` is unknown. Raises
    :class:`KeyValueStoreError` when the collection cannot be read or the edit
    cannot be written.
    """

    with store.mutation():
        snapshot = store.load()
        notification = find_by_id(snapshot.notifications, notification_id)
        if notification is None:
            return None

        if title is not None:
            notification.title = title
        if message is not None:
            notification.message = message
        if priority is not None:
            notification.priority = coerce_enum(NotificationPriority, priority, "priority")
        if type is not None:
            notification.type = coerce_enum(NotificationType, type, "type")
        if link is not None:
            notification.link = link
        if pinned is not None:
            notification.pinned = pinned

        result = store.save(snapshot)

    if not result.ok:
        raise StorageUnavailableError(
            f"Update of notification {notification_id} was not stored: {result.reason}"
        )
    return notification


def delete_notification(store: NotificationStore, notification_id: str) -> bool:
    """Remove one notification; returns ``False`` when it does not exist.

    Raises :class:`KeyValueStoreError` when the collection cannot be read or
    the removal cannot be written.
    """

    with store.mutation():
        snapshot = store.load()
        remaining = [n for n in snapshot.notifications if n.id != notification_id]
        if len(remaining) == len(snapshot.notifications):
            return False
        snapshot.notifications = remaining
        result = store.save(snapshot)

    if not result.ok:
        raise StorageUnavailableError(
            f"Deletion of notification {notification_id} was not stored: {result.reason}"
        )
    logger.info("Deleted notification %s", notification_id)
    return True


def clear_notifications(store: NotificationStore) -> StoreResult:
    """Remove every notification of every user."""

    with store.mutation():
        result = store.clear()
    if result.ok:
        logger.info("Cleared all notifications")
    return result


__all__ = [
    "NotificationFilters",
    "NotificationStatusFilter",
    "clear_notifications",
    "delete_notification",
    "get_unread_count",
    "list_admin_notifications",
    "order_for_display",
    "update_notification",
]
