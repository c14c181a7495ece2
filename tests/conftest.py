"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Any

import pytest

# Keep the application engine in memory; must run before ``campusnet`` is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"

from campusnet.config import reset_settings_cache
from campusnet.infrastructure.key_value import InMemoryKeyValueStore, StorageUnavailableError
from campusnet.infrastructure.repositories import (
    NotificationStore,
    NotificationTemplateRepository,
    UserDirectory,
)
from campusnet.utils.datetime import get_app_timezone


class FlakyKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose reads or writes can be switched to fail."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.fail_reads = False
        self.fail_writes = False
        super().__init__(initial)

    def get(self, key: str) -> Any | None:
        if self.fail_reads:
            raise StorageUnavailableError("storage disabled")
        return super().get(key)

    def set(self, key: str, value: Any) -> None:
        if self.fail_writes:
            raise StorageUnavailableError("quota exceeded")
        super().set(key, value)

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise StorageUnavailableError("storage disabled")
        super().remove(key)


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture()
def kv_store() -> FlakyKeyValueStore:
    return FlakyKeyValueStore()


@pytest.fixture()
def store(kv_store: FlakyKeyValueStore) -> NotificationStore:
    return NotificationStore(kv_store)


@pytest.fixture()
def directory(kv_store: FlakyKeyValueStore) -> UserDirectory:
    return UserDirectory(kv_store)


@pytest.fixture()
def template_repository(kv_store: FlakyKeyValueStore) -> NotificationTemplateRepository:
    return NotificationTemplateRepository(kv_store)


@pytest.fixture()
def now() -> datetime:
    return datetime(2024, 9, 2, 9, 30, tzinfo=timezone.utc)
