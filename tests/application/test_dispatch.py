"""Tests for single and broadcast notification creation."""

from __future__ import annotations

from datetime import timedelta

import pytest

from campusnet.application.use_cases.notifications import (
    NotificationValidationError,
    TargetGroup,
    broadcast_notification,
    create_notification,
)
from campusnet.domain.entities import (
    DeliveryStatus,
    NotificationPriority,
    NotificationSender,
    NotificationType,
)


def test_create_then_get_for_user_returns_one_unread_record(store, now) -> None:
    sender = NotificationSender(id="u2", name="Riya", avatar="/riya.png")

    created = create_notification(
        store,
        user_id="u1",
        type=NotificationType.MENTION,
        title="You were mentioned",
        message="Riya mentioned you in a post",
        priority="high",
        sender=sender,
        link="/social/posts/9",
        now=now,
    )

    stored = store.get_for_user("u1")
    assert stored == [created]
    assert created.read is False
    assert created.type is NotificationType.MENTION
    assert created.priority is NotificationPriority.HIGH
    assert created.sender == sender
    assert created.link == "/social/posts/9"
    assert created.timestamp == now


def test_welcome_notification_is_delivered_immediately(store) -> None:
    created = create_notification(
        store, user_id="u1", type="welcome", title="Welcome!", message="Glad you joined"
    )

    assert created.delivery_status is DeliveryStatus.DELIVERED
    assert created.scheduled_for is None
    assert created.priority is NotificationPriority.MEDIUM
    assert len(store.get_for_user("u1")) == 1


def test_scheduled_notification_starts_pending(store, now) -> None:
    created = create_notification(
        store,
        user_id="u1",
        type="event",
        title="Fest",
        message="Starts soon",
        scheduled_for=(now + timedelta(days=1)).isoformat(),
        now=now,
    )

    assert created.delivery_status is DeliveryStatus.PENDING
    assert created.scheduled_for == now + timedelta(days=1)


def test_past_schedule_and_empty_text_are_accepted(store, now) -> None:
    created = create_notification(
        store,
        user_id="u1",
        type="announcement",
        title="",
        message="",
        scheduled_for=now - timedelta(days=1),
        now=now,
    )

    assert created.delivery_status is DeliveryStatus.PENDING


def test_create_for_unknown_user_is_allowed(store, directory) -> None:
    assert directory.get_all_users() == []

    create_notification(store, user_id="future-user", type="welcome", title="Hi", message="Hello")

    assert len(store.get_for_user("future-user")) == 1


@pytest.mark.parametrize(
    ("field", "value"),
    [("type", "comment"), ("priority", "urgent"), ("scheduled_for", "next monday")],
)
def test_create_rejects_values_outside_enumerations(store, field, value) -> None:
    arguments = {"user_id": "u1", "type": "like", "title": "t", "message": "m", field: value}

    with pytest.raises(NotificationValidationError):
        create_notification(store, **arguments)

    assert store.get_all() == []


def test_created_ids_are_unique_and_ordered(store) -> None:
    created = [
        create_notification(store, user_id="u1", type="like", title="t", message=str(index))
        for index in range(25)
    ]

    ids = [int(notification.id) for notification in created]
    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)


def test_failed_write_is_logged_and_record_still_returned(kv_store, store, caplog) -> None:
    kv_store.fail_writes = True

    with caplog.at_level("WARNING"):
        created = create_notification(store, user_id="u1", type="like", title="t", message="m")

    assert created.user_id == "u1"
    assert "created but not stored" in caplog.text
    kv_store.fail_writes = False
    assert store.get_all() == []


def _seed_users(kv_store, users) -> None:
    kv_store.set("users", users)


def test_broadcast_to_students_creates_one_record_per_student(kv_store, store, directory) -> None:
    _seed_users(
        kv_store,
        [
            {"id": "s1", "role": "student"},
            {"id": "t1", "role": "teacher"},
            {"id": "s2", "role": "student"},
            {"id": "a1", "role": "admin"},
            {"id": "s3", "role": "student"},
        ],
    )

    created = broadcast_notification(
        store,
        directory,
        type="announcement",
        title="Library hours",
        message="Open until 10pm",
        priority="low",
        target_group="students",
    )

    assert [notification.user_id for notification in created] == ["s1", "s2", "s3"]
    assert len({notification.id for notification in created}) == 3
    assert all(notification.target_group == "students" for notification in created)
    assert store.get_all() == created


def test_broadcast_to_teachers_scenario(kv_store, store, directory) -> None:
    _seed_users(kv_store, [{"id": "a", "role": "teacher"}, {"id": "b", "role": "student"}])

    created = broadcast_notification(
        store,
        directory,
        type="announcement",
        title="Exam Notice",
        message="Exams start Monday",
        priority="high",
        sender=None,
        target_group=TargetGroup.TEACHERS,
    )

    assert len(created) == 1
    assert created[0].user_id == "a"
    assert created[0].priority is NotificationPriority.HIGH
    assert created[0].link is None
    assert store.get_for_user("b") == []


def test_broadcast_to_verified_users(kv_store, store, directory) -> None:
    _seed_users(
        kv_store,
        [
            {"id": "v1", "role": "student", "isVerified": True},
            {"id": "n1", "role": "student", "isVerified": False},
            {"id": "n2", "role": "teacher"},
        ],
    )

    created = broadcast_notification(
        store, directory, type="verification", title="t", message="m", target_group="verified"
    )

    assert [notification.user_id for notification in created] == ["v1"]


def test_broadcast_to_new_users_includes_thirty_day_boundary(kv_store, store, directory, now) -> None:
    _seed_users(
        kv_store,
        [
            {"id": "boundary", "createdAt": (now - timedelta(days=30)).isoformat()},
            {"id": "old", "createdAt": (now - timedelta(days=30, seconds=1)).isoformat()},
            {"id": "fresh", "createdAt": (now - timedelta(days=2)).isoformat()},
            {"id": "unknown"},
        ],
    )

    created = broadcast_notification(
        store, directory, type="welcome", title="t", message="m", target_group="new", now=now
    )

    assert [notification.user_id for notification in created] == ["boundary", "fresh"]


@pytest.mark.parametrize("target_group", [None, "alumni"])
def test_broadcast_without_recognized_group_reaches_everyone(
    kv_store, store, directory, target_group
) -> None:
    _seed_users(kv_store, [{"id": "a", "role": "teacher"}, {"id": "b", "role": "student"}])

    created = broadcast_notification(
        store, directory, type="admin_message", title="t", message="m", target_group=target_group
    )

    assert [notification.user_id for notification in created] == ["a", "b"]
    assert all(notification.target_group == target_group for notification in created)


def test_broadcast_against_empty_registry_returns_empty(store, directory) -> None:
    assert broadcast_notification(store, directory, type="event", title="t", message="m") == []
    assert store.get_all() == []


def test_scheduled_broadcast_copies_are_pending(kv_store, store, directory, now) -> None:
    _seed_users(kv_store, [{"id": "a"}, {"id": "b"}])

    created = broadcast_notification(
        store,
        directory,
        type="event",
        title="t",
        message="m",
        scheduled_for=now + timedelta(hours=1),
        now=now,
    )

    assert {notification.delivery_status for notification in created} == {DeliveryStatus.PENDING}


def test_broadcast_appends_to_existing_notifications(kv_store, store, directory) -> None:
    existing = create_notification(store, user_id="a", type="like", title="t", message="m")
    _seed_users(kv_store, [{"id": "a"}])

    created = broadcast_notification(store, directory, type="event", title="t", message="m")

    assert {notification.id for notification in store.get_all()} == {existing.id, created[0].id}


def test_create_keeps_records_of_unsupported_types(kv_store, store, now) -> None:
    comment = {
        "id": "1",
        "userId": "u1",
        "type": "comment",
        "title": "New comment",
        "message": "m",
        "timestamp": now.isoformat(),
    }
    kv_store.set("notifications", [comment])

    created = create_notification(store, user_id="u2", type="like", title="t", message="m")

    stored = kv_store.get("notifications")
    assert comment in stored
    assert created.id in [record["id"] for record in stored]


def test_create_does_not_overwrite_collection_it_could_not_read(kv_store, store, caplog) -> None:
    first = create_notification(store, user_id="u1", type="like", title="a", message="m")
    kv_store.fail_reads = True

    with caplog.at_level("WARNING"):
        second = create_notification(store, user_id="u1", type="like", title="b", message="m")

    assert second.title == "b"
    assert "created but not stored" in caplog.text
    kv_store.fail_reads = False
    assert [notification.id for notification in store.get_all()] == [first.id]


def test_broadcast_ignores_users_with_out_of_range_creation_dates(kv_store, store, directory, now) -> None:
    kv_store.set_raw(
        "users",
        '[{"id": "a", "createdAt": 1e300}, {"id": "b", "createdAt": "%s"}]' % now.isoformat(),
    )

    created = broadcast_notification(
        store, directory, type="welcome", title="t", message="m", target_group="new", now=now
    )

    assert [notification.user_id for notification in created] == ["b"]
