"""Generic key-value persistence used by the notification collections.

Values are JSON documents addressed by a string key. Every write replaces the
whole value; there are no partial updates and no versioning, so concurrent
writers from different processes follow last-writer-wins semantics.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campusnet.infrastructure.models import KeyValueEntryModel

logger = logging.getLogger(__name__)


class KeyValueStoreError(RuntimeError):
    """Base error raised by key-value stores."""


class StorageUnavailableError(KeyValueStoreError):
    """The underlying storage could not be read or written."""


class CorruptValueError(KeyValueStoreError):
    """The stored value exists but is not valid JSON."""


class KeyValueStore(Protocol):
    """Synchronous get/set/remove over string keys."""

    def get(self, key: str) -> Any | None:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        msg = f"Stored value for key '{key}' is not valid JSON"
        raise CorruptValueError(msg) from exc


def _encode(key: str, value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as exc:
        msg = f"Value for key '{key}' is not JSON serializable"
        raise StorageUnavailableError(msg) from exc


class InMemoryKeyValueStore:
    """Process-local store keeping values serialized as JSON text."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        return _decode(key, raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = _encode(key, value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def get_raw(self, key: str) -> str | None:
        """Return the serialized text stored under ``key``."""

        return self._data.get(key)

    def set_raw(self, key: str, raw: str) -> None:
        """Store ``raw`` verbatim, bypassing serialization."""

        self._data[key] = raw


class SqlAlchemyKeyValueStore:
    """Store values in the ``kv_entry`` table, one row per key."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> Any | None:
        session = self._session_factory()
        try:
            model = session.get(KeyValueEntryModel, key)
            raw = model.value if model is not None else None
        except SQLAlchemyError as exc:
            logger.warning("Could not read key '%s' from storage: %s", key, exc)
            raise StorageUnavailableError(f"Could not read key '{key}'") from exc
        finally:
            session.close()
        if raw is None:
            return None
        return _decode(key, raw)

    def set(self, key: str, value: Any) -> None:
        raw = _encode(key, value)
        session = self._session_factory()
        try:
            model = session.get(KeyValueEntryModel, key)
            if model is None:
                model = KeyValueEntryModel(key=key, value=raw)
            else:
                model.value = raw
            session.add(model)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning("Could not write key '%s' to storage: %s", key, exc)
            raise StorageUnavailableError(f"Could not write key '{key}'") from exc
        finally:
            session.close()

    def remove(self, key: str) -> None:
        session = self._session_factory()
        try:
            model = session.get(KeyValueEntryModel, key)
            if model is None:
                return
            session.delete(model)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning("Could not remove key '%s' from storage: %s", key, exc)
            raise StorageUnavailableError(f"Could not remove key '{key}'") from exc
        finally:
            session.close()


__all__ = [
    "CorruptValueError",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "KeyValueStoreError",
    "SqlAlchemyKeyValueStore",
    "StorageUnavailableError",
]
