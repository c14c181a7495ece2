"""Helper utilities shared by the notification routes."""

from __future__ import annotations

from campusnet.domain.entities import (
    Notification,
    NotificationSender,
    NotificationTemplate,
)
from campusnet.interfaces.api.schemas import (
    NotificationRead,
    NotificationSenderSchema,
    NotificationTemplateRead,
)


def notification_to_schema(notification: Notification) -> NotificationRead:
    sender = None
    if notification.sender is not None:
        sender = NotificationSenderSchema(
            id=notification.sender.id,
            name=notification.sender.name,
            avatar=notification.sender.avatar,
        )
    return NotificationRead(
        id=notification.id,
        user_id=notification.user_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        timestamp=notification.timestamp,
        read=notification.read,
        priority=notification.priority,
        sender=sender,
        link=notification.link,
        scheduled_for=notification.scheduled_for,
        target_group=notification.target_group,
        delivery_status=notification.delivery_status,
        pinned=notification.pinned,
    )


def sender_from_schema(sender: NotificationSenderSchema | None) -> NotificationSender | None:
    if sender is None:
        return None
    return NotificationSender(id=sender.id, name=sender.name, avatar=sender.avatar)


def template_to_schema(template: NotificationTemplate) -> NotificationTemplateRead:
    return NotificationTemplateRead(
        id=template.id,
        name=template.name,
        type=template.type,
        title=template.title,
        message=template.message,
        priority=template.priority,
    )


__all__ = ["notification_to_schema", "sender_from_schema", "template_to_schema"]
