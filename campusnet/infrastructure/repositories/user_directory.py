"""Read-only access to the user registry used for broadcast targeting."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from campusnet.config import get_settings
from campusnet.domain.entities import UserRecord
from campusnet.infrastructure.key_value import KeyValueStore, KeyValueStoreError
from campusnet.utils import parse_iso_datetime

logger = logging.getLogger(__name__)


class UserDirectory:
    """List users stored as a JSON array under the users key.

    The directory is owned by the profile feature; notifications only read it.
    """

    def __init__(self, kv_store: KeyValueStore, *, key: str | None = None) -> None:
        self.kv_store = kv_store
        self.key = key or get_settings().users_key

    def get_all_users(self) -> Sequence[UserRecord]:
        try:
            raw = self.kv_store.get(self.key)
        except KeyValueStoreError as exc:
            logger.warning("User registry unavailable, reading as empty: %s", exc)
            return []
        if not isinstance(raw, list):
            return []

        users: list[UserRecord] = []
        for record in raw:
            try:
                users.append(self._to_entity(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed user record: %s", exc)
        return users

    @staticmethod
    def _to_entity(record: dict[str, Any]) -> UserRecord:
        try:
            created_at = parse_iso_datetime(record.get("createdAt") or None)
        except (TypeError, ValueError):
            created_at = None
        return UserRecord(
            id=str(record["id"]),
            role=record.get("role"),
            is_verified=bool(record.get("isVerified")),
            created_at=created_at,
            name=record.get("name"),
        )


__all__ = ["UserDirectory"]
