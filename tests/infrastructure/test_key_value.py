"""Tests for the key-value store implementations."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campusnet.infrastructure.database import initialize_database
from campusnet.infrastructure.key_value import (
    CorruptValueError,
    InMemoryKeyValueStore,
    SqlAlchemyKeyValueStore,
    StorageUnavailableError,
)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_in_memory_store_returns_independent_copies() -> None:
    kv = InMemoryKeyValueStore({"users": [{"id": "u1"}]})

    first = kv.get("users")
    first.append({"id": "u2"})

    assert kv.get("users") == [{"id": "u1"}]


def test_in_memory_store_missing_and_removed_keys() -> None:
    kv = InMemoryKeyValueStore()
    assert kv.get("missing") is None

    kv.set("key", {"a": 1})
    kv.remove("key")
    kv.remove("key")

    assert kv.get("key") is None


def test_in_memory_store_rejects_corrupt_text() -> None:
    kv = InMemoryKeyValueStore()
    kv.set_raw("notifications", "{not json")

    with pytest.raises(CorruptValueError):
        kv.get("notifications")


def test_sqlalchemy_store_round_trip(session_factory) -> None:
    kv = SqlAlchemyKeyValueStore(session_factory)

    assert kv.get("notifications") is None

    kv.set("notifications", [{"id": "1"}])
    kv.set("notifications", [{"id": "1"}, {"id": "2"}])

    assert kv.get("notifications") == [{"id": "1"}, {"id": "2"}]

    kv.remove("notifications")
    assert kv.get("notifications") is None


def test_sqlalchemy_store_wraps_database_errors() -> None:
    class BrokenSession:
        def get(self, *args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        def rollback(self) -> None:
            pass

        def close(self) -> None:
            pass

    kv = SqlAlchemyKeyValueStore(BrokenSession)

    with pytest.raises(StorageUnavailableError):
        kv.get("notifications")
    with pytest.raises(StorageUnavailableError):
        kv.set("notifications", [])
