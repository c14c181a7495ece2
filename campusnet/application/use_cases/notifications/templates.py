"""Saved compose templates for admin broadcasts."""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from campusnet.domain.entities import (
    NotificationPriority,
    NotificationTemplate,
    NotificationType,
)
from campusnet.infrastructure.repositories import NotificationTemplateRepository

from .dispatch import coerce_enum


def save_template(
    repository: NotificationTemplateRepository,
    *,
    name: str,
    type: NotificationType | str,
    title: str,
    message: str,
    priority: NotificationPriority | str = NotificationPriority.MEDIUM,
) -> NotificationTemplate:
    """Store a new template and return it."""

    if not name.strip():
        raise ValueError("Template name is required")

    template = NotificationTemplate(
        id=str(uuid.uuid4()),
        name=name.strip(),
        type=coerce_enum(NotificationType, type, "type"),
        title=title,
        message=message,
        priority=coerce_enum(NotificationPriority, priority, "priority"),
    )
    return repository.create(template)


def list_templates(repository: NotificationTemplateRepository) -> Sequence[NotificationTemplate]:
    return repository.list()


def delete_template(repository: NotificationTemplateRepository, template_id: str) -> bool:
    return repository.delete(template_id)


__all__ = ["delete_template", "list_templates", "save_template"]
