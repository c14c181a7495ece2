"""Public helpers for creating and managing notifications."""

from .dispatch import (
    NotificationValidationError,
    broadcast_notification,
    create_notification,
)
from .management import (
    NotificationFilters,
    NotificationStatusFilter,
    clear_notifications,
    delete_notification,
    get_unread_count,
    list_admin_notifications,
    order_for_display,
    update_notification,
)
from .read_state import mark_all_notifications_as_read, mark_notification_as_read
from .scheduled import process_scheduled_notifications
from .targeting import TargetGroup, resolve_target_group
from .templates import delete_template, list_templates, save_template

__all__ = [
    "NotificationFilters",
    "NotificationStatusFilter",
    "NotificationValidationError",
    "TargetGroup",
    "broadcast_notification",
    "clear_notifications",
    "create_notification",
    "delete_notification",
    "delete_template",
    "get_unread_count",
    "list_admin_notifications",
    "list_templates",
    "mark_all_notifications_as_read",
    "mark_notification_as_read",
    "order_for_display",
    "process_scheduled_notifications",
    "resolve_target_group",
    "save_template",
    "update_notification",
]
