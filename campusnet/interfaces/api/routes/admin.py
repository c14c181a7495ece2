"""Administrative endpoints for notifications, scheduled delivery and templates."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from campusnet.application.use_cases.notifications import (
    NotificationFilters,
    clear_notifications as clear_notifications_uc,
    delete_template as delete_template_uc,
    list_admin_notifications as list_admin_notifications_uc,
    list_templates as list_templates_uc,
    process_scheduled_notifications as process_scheduled_uc,
    save_template as save_template_uc,
)
from campusnet.infrastructure.key_value import KeyValueStoreError
from campusnet.infrastructure.repositories import (
    NotificationStore,
    NotificationTemplateRepository,
)
from campusnet.interfaces.api.dependencies import (
    get_notification_store,
    get_template_repository,
)
from campusnet.interfaces.api.routes_helpers import notification_to_schema, template_to_schema
from campusnet.interfaces.api.schemas import (
    NotificationAdminFilters,
    NotificationRead,
    NotificationTemplateCreate,
    NotificationTemplateRead,
    ScheduledRunRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

_STORAGE_UNAVAILABLE_DETAIL = "El almacenamiento de notificaciones no está disponible"


@router.get("/notifications", response_model=list[NotificationRead])
def list_admin_notifications(
    filters: NotificationAdminFilters = Depends(),
    store: NotificationStore = Depends(get_notification_store),
) -> list[NotificationRead]:
    """Devuelve las notificaciones de todos los usuarios aplicando los filtros."""

    notifications = list_admin_notifications_uc(
        store,
        NotificationFilters(
            type=filters.type,
            priority=filters.priority,
            target_group=filters.target_group,
            status=filters.status,
        ),
    )
    return [notification_to_schema(notification) for notification in notifications]


@router.delete("/notifications", status_code=status.HTTP_204_NO_CONTENT)
def clear_notifications(
    store: NotificationStore = Depends(get_notification_store),
) -> Response:
    """Elimina todas las notificaciones almacenadas."""

    result = clear_notifications_uc(store)
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORAGE_UNAVAILABLE_DETAIL,
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/notifications/process-scheduled", response_model=ScheduledRunRead)
def process_scheduled_notifications(
    store: NotificationStore = Depends(get_notification_store),
) -> ScheduledRunRead:
    """Entrega las notificaciones programadas cuya fecha ya se cumplió."""

    try:
        delivered = process_scheduled_uc(store)
    except KeyValueStoreError as exc:
        logger.error("Scheduled delivery sweep failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORAGE_UNAVAILABLE_DETAIL,
        ) from exc
    return ScheduledRunRead(
        delivered=len(delivered),
        notifications=[notification_to_schema(notification) for notification in delivered],
    )


@router.get("/notification-templates", response_model=list[NotificationTemplateRead])
def list_notification_templates(
    repository: NotificationTemplateRepository = Depends(get_template_repository),
) -> list[NotificationTemplateRead]:
    """Devuelve las plantillas de notificación guardadas."""

    return [template_to_schema(template) for template in list_templates_uc(repository)]


@router.post(
    "/notification-templates",
    response_model=NotificationTemplateRead,
    status_code=status.HTTP_201_CREATED,
)
def create_notification_template(
    payload: NotificationTemplateCreate,
    repository: NotificationTemplateRepository = Depends(get_template_repository),
) -> NotificationTemplateRead:
    """Guarda una plantilla reutilizable para redactar notificaciones."""

    try:
        template = save_template_uc(
            repository,
            name=payload.name,
            type=payload.type,
            title=payload.title,
            message=payload.message,
            priority=payload.priority,
        )
    except KeyValueStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORAGE_UNAVAILABLE_DETAIL,
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return template_to_schema(template)


@router.delete("/notification-templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification_template(
    template_id: str,
    repository: NotificationTemplateRepository = Depends(get_template_repository),
) -> Response:
    """Elimina una plantilla de notificación."""

    try:
        deleted = delete_template_uc(repository, template_id)
    except KeyValueStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORAGE_UNAVAILABLE_DETAIL,
        ) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plantilla no encontrada")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
