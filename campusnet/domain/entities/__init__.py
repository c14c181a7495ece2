"""Domain entities exposed by the application."""

from .notification import (
    DeliveryStatus,
    Notification,
    NotificationPriority,
    NotificationSender,
    NotificationTemplate,
    NotificationType,
)
from .user import (
    USER_ROLE_STUDENT,
    USER_ROLE_TEACHER,
    UserRecord,
)

__all__ = [
    "DeliveryStatus",
    "Notification",
    "NotificationPriority",
    "NotificationSender",
    "NotificationTemplate",
    "NotificationType",
    "UserRecord",
    "USER_ROLE_STUDENT",
    "USER_ROLE_TEACHER",
]
