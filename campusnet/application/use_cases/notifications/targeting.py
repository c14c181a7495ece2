"""Resolve broadcast cohorts from the user registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from enum import Enum

from campusnet.domain.entities import USER_ROLE_STUDENT, USER_ROLE_TEACHER, UserRecord

logger = logging.getLogger(__name__)


class TargetGroup(str, Enum):
    """Named cohorts a broadcast can be restricted to."""

    STUDENTS = "students"
    TEACHERS = "teachers"
    VERIFIED = "verified"
    NEW = "new"


def resolve_target_group(value: TargetGroup | str | None) -> TargetGroup | None:
    """Return the :class:`TargetGroup` for ``value``.

    ``None`` means "everyone"; so does any value outside the enumeration, which
    is logged rather than rejected.
    """

    if value is None or isinstance(value, TargetGroup):
        return value
    try:
        return TargetGroup(value)
    except ValueError:
        logger.info("Unknown target group '%s'; broadcasting to all users", value)
        return None


def _is_student(user: UserRecord, now: datetime, window: timedelta) -> bool:
    return user.has_role(USER_ROLE_STUDENT)


def _is_teacher(user: UserRecord, now: datetime, window: timedelta) -> bool:
    return user.has_role(USER_ROLE_TEACHER)


def _is_verified(user: UserRecord, now: datetime, window: timedelta) -> bool:
    return bool(user.is_verified)


def _is_new(user: UserRecord, now: datetime, window: timedelta) -> bool:
    return user.created_at is not None and user.created_at >= now - window


_PREDICATES: dict[TargetGroup, Callable[[UserRecord, datetime, timedelta], bool]] = {
    TargetGroup.STUDENTS: _is_student,
    TargetGroup.TEACHERS: _is_teacher,
    TargetGroup.VERIFIED: _is_verified,
    TargetGroup.NEW: _is_new,
}


def select_target_users(
    users: Iterable[UserRecord],
    group: TargetGroup | None,
    *,
    now: datetime,
    new_user_window: timedelta = timedelta(days=30),
) -> list[UserRecord]:
    """Return the members of ``group`` in registry order."""

    if group is None:
        return list(users)
    predicate = _PREDICATES[group]
    return [user for user in users if predicate(user, now, new_user_window)]


__all__ = ["TargetGroup", "resolve_target_group", "select_target_users"]
