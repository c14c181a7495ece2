"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from campusnet.application.use_cases.notifications import (
    NotificationStatusFilter,
    TargetGroup,
)
from campusnet.domain.entities import (
    DeliveryStatus,
    NotificationPriority,
    NotificationType,
)


class NotificationSenderSchema(BaseModel):
    """User shown as the origin of a notification."""

    id: str = Field(..., min_length=1)
    name: str
    avatar: str | None = None


class NotificationCreate(BaseModel):
    """Payload used to notify a single user."""

    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(..., min_length=1, description="Destinatario de la notificación")
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.MEDIUM
    sender: NotificationSenderSchema | None = None
    link: str | None = None
    scheduled_for: datetime | None = None


class NotificationBroadcast(BaseModel):
    """Payload used to notify every member of a cohort."""

    model_config = ConfigDict(extra="forbid")

    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.MEDIUM
    sender: NotificationSenderSchema | None = None
    target_group: TargetGroup | None = Field(
        default=None, description="Grupo destinatario; vacío envía a todos los usuarios"
    )
    scheduled_for: datetime | None = None


class NotificationUpdate(BaseModel):
    """Editable content fields of a notification."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    message: str | None = None
    priority: NotificationPriority | None = None
    type: NotificationType | None = None
    link: str | None = None
    pinned: bool | None = None


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool
    priority: NotificationPriority
    sender: NotificationSenderSchema | None = None
    link: str | None = None
    scheduled_for: datetime | None = None
    target_group: str | None = None
    delivery_status: DeliveryStatus
    pinned: bool = False


class NotificationAdminFilters(BaseModel):
    """Query filters accepted by the admin listing."""

    type: NotificationType | None = None
    priority: NotificationPriority | None = None
    target_group: str | None = None
    status: NotificationStatusFilter | None = None


class UnreadCountRead(BaseModel):
    user_id: str
    unread: int


class ScheduledRunRead(BaseModel):
    """Result of one scheduled delivery sweep."""

    delivered: int
    notifications: list[NotificationRead] = Field(default_factory=list)


class NotificationTemplateCreate(BaseModel):
    """Payload used to save a reusable compose template."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority = NotificationPriority.MEDIUM


class NotificationTemplateRead(BaseModel):
    id: str
    name: str
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority


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
