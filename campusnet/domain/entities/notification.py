"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Closed set of notification categories."""

    FOLLOW = "follow"
    MENTION = "mention"
    ANNOUNCEMENT = "announcement"
    WELCOME = "welcome"
    PROFILE_UPDATE = "profile_update"
    ADMIN_MESSAGE = "admin_message"
    VERIFICATION = "verification"
    LIKE = "like"
    SHARE = "share"
    PAGE = "page"
    EVENT = "event"
    MARKETPLACE = "marketplace"
    BADGE = "badge"


class NotificationPriority(str, Enum):
    """Urgency shown to the recipient."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class DeliveryStatus(str, Enum):
    """Delivery state of a notification.

    Only ``PENDING -> DELIVERED`` is ever performed. ``FAILED`` is kept so
    stored records and admin filters can express it.
    """

    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass
class NotificationSender:
    """Descriptor of the user that triggered a notification."""

    id: str
    name: str
    avatar: str | None = None


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    priority: NotificationPriority = NotificationPriority.MEDIUM
    sender: NotificationSender | None = None
    link: str | None = None
    scheduled_for: datetime | None = None
    target_group: str | None = None
    delivery_status: DeliveryStatus = DeliveryStatus.DELIVERED
    pinned: bool = False
    # Stored keys this service does not model, written back unchanged.
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_pending(self) -> bool:
        """Return ``True`` while the notification awaits scheduled delivery."""

        return self.delivery_status is DeliveryStatus.PENDING

    def is_due(self, now: datetime) -> bool:
        """Return ``True`` when a pending notification should be delivered at ``now``."""

        return (
            self.is_pending
            and self.scheduled_for is not None
            and self.scheduled_for <= now
        )


@dataclass
class NotificationTemplate:
    """Reusable compose template saved by administrators."""

    id: str
    name: str
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.MEDIUM


__all__ = [
    "DeliveryStatus",
    "Notification",
    "NotificationPriority",
    "NotificationSender",
    "NotificationTemplate",
    "NotificationType",
]
