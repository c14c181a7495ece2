"""Persistence helpers for admin notification templates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from campusnet.config import get_settings
from campusnet.domain.entities import (
    NotificationPriority,
    NotificationTemplate,
    NotificationType,
)
from campusnet.infrastructure.key_value import (
    CorruptValueError,
    KeyValueStore,
    KeyValueStoreError,
)

logger = logging.getLogger(__name__)


class NotificationTemplateRepository:
    """Provide list/create/delete operations for :class:`NotificationTemplate`."""

    def __init__(self, kv_store: KeyValueStore, *, key: str | None = None) -> None:
        self.kv_store = kv_store
        self.key = key or get_settings().notification_templates_key

    def list(self) -> Sequence[NotificationTemplate]:
        try:
            raw = self._load()
        except KeyValueStoreError as exc:
            logger.warning("Notification templates unavailable, reading as empty: %s", exc)
            return []
        templates: list[NotificationTemplate] = []
        for record in raw:
            try:
                templates.append(self._to_entity(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed notification template: %s", exc)
        return templates

    def create(self, template: NotificationTemplate) -> NotificationTemplate:
        records = self._load()
        records.append(self._to_record(template))
        self.kv_store.set(self.key, records)
        return template

    def delete(self, template_id: str) -> bool:
        records = self._load()
        remaining = [
            record
            for record in records
            if not (isinstance(record, dict) and str(record.get("id")) == template_id)
        ]
        if len(remaining) == len(records):
            return False
        self.kv_store.set(self.key, remaining)
        return True

    def _load(self) -> list[Any]:
        """Return the stored records as is; raises when they cannot be read."""

        raw = self.kv_store.get(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise CorruptValueError(f"Notification templates under '{self.key}' are not a list")
        return raw

    @staticmethod
    def _to_record(template: NotificationTemplate) -> dict[str, Any]:
        return {
            "id": template.id,
            "name": template.name,
            "type": template.type.value,
            "title": template.title,
            "message": template.message,
            "priority": template.priority.value,
        }

    @staticmethod
    def _to_entity(record: dict[str, Any]) -> NotificationTemplate:
        return NotificationTemplate(
            id=str(record["id"]),
            name=str(record["name"]),
            type=NotificationType(record["type"]),
            title=str(record.get("title", "")),
            message=str(record.get("message", "")),
            priority=NotificationPriority(record.get("priority") or NotificationPriority.MEDIUM),
        )


__all__ = ["NotificationTemplateRepository"]
