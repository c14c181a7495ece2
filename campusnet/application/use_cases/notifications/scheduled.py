"""Promote scheduled notifications once their delivery time has passed."""

from __future__ import annotations

import logging
from datetime import datetime

from campusnet.domain.entities import DeliveryStatus, Notification
from campusnet.infrastructure.key_value import StorageUnavailableError
from campusnet.infrastructure.repositories import NotificationStore
from campusnet.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


def process_scheduled_notifications(
    store: NotificationStore, *, now: datetime | None = None
) -> list[Notification]:
    """Mark every due pending notification as delivered.

    Returns only the notifications transitioned by this call, so running the
    sweep again with the same or a later ``now`` returns nothing new. The sweep
    is triggered externally; nothing here schedules itself.

    Raises :class:`KeyValueStoreError` when the collection cannot be read, and
    :class:`StorageUnavailableError` when the promoted collection could not be
    written back.
    """

    current_time = ensure_app_timezone(now) or now_in_app_timezone()
    with store.mutation():
        snapshot = store.load()
        delivered: list[Notification] = []
        for notification in snapshot.notifications:
            if notification.is_due(current_time):
                notification.delivery_status = DeliveryStatus.DELIVERED
                delivered.append(notification)

        if not delivered:
            logger.debug("No scheduled notifications due at %s", current_time.isoformat())
            return []

        result = store.save(snapshot)

    if not result.ok:
        msg = f"Could not persist {len(delivered)} delivered notification(s): {result.reason}"
        raise StorageUnavailableError(msg)

    logger.info("Delivered %d scheduled notification(s)", len(delivered))
    return delivered


__all__ = ["process_scheduled_notifications"]
