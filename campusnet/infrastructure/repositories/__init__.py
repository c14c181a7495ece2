"""Repository implementations for infrastructure layer."""

from .notification_store import NotificationSnapshot, NotificationStore, StoreResult
from .notification_template_repository import NotificationTemplateRepository
from .user_directory import UserDirectory

__all__ = [
    "NotificationSnapshot",
    "NotificationStore",
    "NotificationTemplateRepository",
    "StoreResult",
    "UserDirectory",
]
