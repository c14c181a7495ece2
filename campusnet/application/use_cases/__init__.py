"""Aggregate application use cases."""

from .notifications import (
    broadcast_notification,
    create_notification,
    process_scheduled_notifications,
)

__all__ = [
    "broadcast_notification",
    "create_notification",
    "process_scheduled_notifications",
]
