"""FastAPI dependency utilities."""

from functools import lru_cache

from fastapi import Depends

from campusnet.infrastructure.database import SessionLocal
from campusnet.infrastructure.key_value import KeyValueStore, SqlAlchemyKeyValueStore
from campusnet.infrastructure.repositories import (
    NotificationStore,
    NotificationTemplateRepository,
    UserDirectory,
)


@lru_cache
def get_kv_store() -> KeyValueStore:
    """Return the shared key-value store backed by the configured database."""

    return SqlAlchemyKeyValueStore(SessionLocal)


def get_notification_store(kv_store: KeyValueStore = Depends(get_kv_store)) -> NotificationStore:
    """Return the notification collection bound to ``kv_store``."""

    return NotificationStore(kv_store)


def get_user_directory(kv_store: KeyValueStore = Depends(get_kv_store)) -> UserDirectory:
    """Return the read-only user registry bound to ``kv_store``."""

    return UserDirectory(kv_store)


def get_template_repository(
    kv_store: KeyValueStore = Depends(get_kv_store),
) -> NotificationTemplateRepository:
    """Return the admin template repository bound to ``kv_store``."""

    return NotificationTemplateRepository(kv_store)
