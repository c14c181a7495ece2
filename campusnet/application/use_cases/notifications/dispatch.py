"""Create single and broadcast notifications."""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timedelta
from enum import Enum
from typing import TypeVar

from campusnet.config import get_settings
from campusnet.domain.entities import (
    DeliveryStatus,
    Notification,
    NotificationPriority,
    NotificationSender,
    NotificationType,
)
from campusnet.infrastructure.repositories import NotificationStore, UserDirectory
from campusnet.utils import ensure_app_timezone, now_in_app_timezone, parse_iso_datetime

from .targeting import TargetGroup, resolve_target_group, select_target_users

logger = logging.getLogger(__name__)

_EnumT = TypeVar("_EnumT", bound=Enum)

_id_lock = threading.Lock()
_last_id = 0


class NotificationValidationError(ValueError):
    """Raised when a notification is built from values outside its enumerations."""


def next_notification_id() -> str:
    """Return a new creation-time-ordered identifier.

    Identifiers are microsecond timestamps bumped past the previous value, so
    two notifications created in the same microsecond still differ.
    """

    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000
        _last_id = max(candidate, _last_id + 1)
        return str(_last_id)


def coerce_enum(enum_type: type[_EnumT], value: _EnumT | str, field: str) -> _EnumT:
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        msg = f"Invalid {field} '{value}'. Expected one of: {allowed}"
        raise NotificationValidationError(msg) from exc


def _coerce_schedule(value: datetime | str | None) -> datetime | None:
    try:
        return parse_iso_datetime(value)
    except (TypeError, ValueError) as exc:
        msg = f"Invalid scheduled_for '{value}'. Expected an ISO-8601 datetime"
        raise NotificationValidationError(msg) from exc


def build_notification(
    *,
    user_id: str,
    type: NotificationType | str,
    title: str,
    message: str,
    priority: NotificationPriority | str = NotificationPriority.MEDIUM,
    sender: NotificationSender | None = None,
    link: str | None = None,
    scheduled_for: datetime | str | None = None,
    target_group: TargetGroup | str | None = None,
    now: datetime | None = None,
) -> Notification:
    """Return a new unread notification without persisting it."""

    notification_type = coerce_enum(NotificationType, type, "type")
    notification_priority = coerce_enum(NotificationPriority, priority, "priority")
    scheduled_at = _coerce_schedule(scheduled_for)
    if isinstance(target_group, TargetGroup):
        target_group = target_group.value

    return Notification(
        id=next_notification_id(),
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        timestamp=ensure_app_timezone(now) or now_in_app_timezone(),
        read=False,
        priority=notification_priority,
        sender=sender,
        link=link,
        scheduled_for=scheduled_at,
        target_group=target_group,
        delivery_status=(
            DeliveryStatus.PENDING if scheduled_at is not None else DeliveryStatus.DELIVERED
        ),
    )


def _append(store: NotificationStore, notifications: list[Notification]) -> None:
    result = store.append(notifications)
    if not result.ok:
        logger.warning(
            "%d notification(s) were created but not stored: %s",
            len(notifications),
            result.reason,
        )


def create_notification(
    store: NotificationStore,
    *,
    user_id: str,
    type: NotificationType | str,
    title: str,
    message: str,
    priority: NotificationPriority | str = NotificationPriority.MEDIUM,
    sender: NotificationSender | None = None,
    link: str | None = None,
    scheduled_for: datetime | str | None = None,
    target_group: TargetGroup | str | None = None,
    now: datetime | None = None,
) -> Notification:
    """Create a notification for ``user_id`` and append it to the collection.

    ``user_id`` is not checked against the user registry, so a welcome message
    can be provisioned before its recipient exists. A failed write is logged
    and the built record is returned anyway.
    """

    notification = build_notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        priority=priority,
        sender=sender,
        link=link,
        scheduled_for=scheduled_for,
        target_group=target_group,
        now=now,
    )
    _append(store, [notification])
    logger.debug("Created %s notification %s for %s", notification.type.value, notification.id, user_id)
    return notification


def broadcast_notification(
    store: NotificationStore,
    directory: UserDirectory,
    *,
    type: NotificationType | str,
    title: str,
    message: str,
    priority: NotificationPriority | str = NotificationPriority.MEDIUM,
    sender: NotificationSender | None = None,
    target_group: TargetGroup | str | None = None,
    scheduled_for: datetime | str | None = None,
    now: datetime | None = None,
) -> list[Notification]:
    """Create one notification per member of ``target_group``.

    Recipients are returned in registry order. An empty registry, or a cohort
    nobody belongs to, produces an empty list.
    """

    type = coerce_enum(NotificationType, type, "type")
    priority = coerce_enum(NotificationPriority, priority, "priority")
    scheduled_for = _coerce_schedule(scheduled_for)

    current_time = ensure_app_timezone(now) or now_in_app_timezone()
    window = timedelta(days=get_settings().new_user_window_days)
    group = resolve_target_group(target_group)
    recipients = select_target_users(
        directory.get_all_users(), group, now=current_time, new_user_window=window
    )

    notifications = [
        build_notification(
            user_id=user.id,
            type=type,
            title=title,
            message=message,
            priority=priority,
            sender=sender,
            scheduled_for=scheduled_for,
            target_group=target_group,
            now=current_time,
        )
        for user in recipients
    ]
    if notifications:
        _append(store, notifications)

    logger.info(
        "Broadcast '%s' to %d user(s) in group %s",
        title,
        len(notifications),
        group.value if group else "all",
    )
    return notifications


__all__ = [
    "NotificationValidationError",
    "broadcast_notification",
    "build_notification",
    "coerce_enum",
    "create_notification",
    "next_notification_id",
]
