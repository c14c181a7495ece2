"""Read-state transitions for notifications."""

from __future__ import annotations

import logging

from campusnet.domain.entities import Notification
from campusnet.infrastructure.key_value import KeyValueStoreError
from campusnet.infrastructure.repositories import NotificationStore
from campusnet.infrastructure.repositories.notification_store import (
    find_by_id,
    sort_newest_first,
)

logger = logging.getLogger(__name__)


def mark_notification_as_read(
    store: NotificationStore, notification_id: str
) -> Notification | None:
    """Set ``read`` on the matching notification.

    Unknown identifiers are a no-op and return ``None``, as does a collection
    that cannot be read. Marking an already read notification leaves the
    collection unchanged.
    """

    with store.mutation():
        try:
            snapshot = store.load()
        except KeyValueStoreError as exc:
            logger.warning("Could not load notifications to mark %s as read: %s", notification_id, exc)
            return None
        notification = find_by_id(snapshot.notifications, notification_id)
        if notification is None:
            return None
        if notification.read:
            return notification
        notification.read = True
        result = store.save(snapshot)

    if not result.ok:
        logger.warning("Read state for %s was not stored: %s", notification_id, result.reason)
    return notification


def mark_all_notifications_as_read(
    store: NotificationStore, user_id: str
) -> list[Notification]:
    """Mark every notification of ``user_id`` as read and return them."""

    with store.mutation():
        try:
            snapshot = store.load()
        except KeyValueStoreError as exc:
            logger.warning("Could not load notifications of %s to mark as read: %s", user_id, exc)
            return []
        mine = [n for n in snapshot.notifications if n.user_id == user_id]
        unread = [n for n in mine if not n.read]
        for notification in unread:
            notification.read = True
        if unread:
            result = store.save(snapshot)
            if not result.ok:
                logger.warning(
                    "Read state for %d notification(s) of %s was not stored: %s",
                    len(unread),
                    user_id,
                    result.reason,
                )

    return sort_newest_first(mine)


__all__ = ["mark_all_notifications_as_read", "mark_notification_as_read"]
