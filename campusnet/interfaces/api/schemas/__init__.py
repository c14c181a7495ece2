from .notification import (
    NotificationAdminFilters,
    NotificationBroadcast,
    NotificationCreate,
    NotificationRead,
    NotificationSenderSchema,
    NotificationTemplateCreate,
    NotificationTemplateRead,
    NotificationUpdate,
    ScheduledRunRead,
    UnreadCountRead,
)

__all__ = [
    "NotificationAdminFilters",
    "NotificationBroadcast",
    "NotificationCreate",
    "NotificationRead",
    "NotificationSenderSchema",
    "NotificationTemplateCreate",
    "NotificationTemplateRead",
    "NotificationUpdate",
    "ScheduledRunRead",
    "UnreadCountRead",
]
