"""Endpoints for creating notifications and tracking their read state."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from campusnet.application.use_cases.notifications import (
    NotificationValidationError,
    broadcast_notification as broadcast_notification_uc,
    create_notification as create_notification_uc,
    delete_notification as delete_notification_uc,
    get_unread_count as get_unread_count_uc,
    mark_all_notifications_as_read as mark_all_as_read_uc,
    mark_notification_as_read as mark_as_read_uc,
    order_for_display,
    update_notification as update_notification_uc,
)
from campusnet.infrastructure.key_value import KeyValueStoreError
from campusnet.infrastructure.repositories import NotificationStore, UserDirectory
from campusnet.interfaces.api.dependencies import get_notification_store, get_user_directory
from campusnet.interfaces.api.routes_helpers import notification_to_schema, sender_from_schema
from campusnet.interfaces.api.schemas import (
    NotificationBroadcast,
    NotificationCreate,
    NotificationRead,
    NotificationUpdate,
    UnreadCountRead,
)

router = APIRouter(tags=["notifications"])

_NOT_FOUND_DETAIL = "Notificación no encontrada"
_STORAGE_UNAVAILABLE_DETAIL = "El almacenamiento de notificaciones no está disponible"


@router.get("/users/{user_id}/notifications", response_model=list[NotificationRead])
def list_user_notifications(
    user_id: str,
    display: bool = False,
    store: NotificationStore = Depends(get_notification_store),
) -> list[NotificationRead]:
    """Devuelve las notificaciones del usuario, de la más reciente a la más antigua."""

    notifications = store.get_for_user(user_id)
    if display:
        notifications = order_for_display(notifications)
    return [notification_to_schema(notification) for notification in notifications]


@router.get("/users/{user_id}/notifications/unread-count", response_model=UnreadCountRead)
def read_unread_count(
    user_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> UnreadCountRead:
    """Devuelve cuántas notificaciones del usuario siguen sin leer."""

    return UnreadCountRead(user_id=user_id, unread=get_unread_count_uc(store, user_id))


@router.post("/users/{user_id}/notifications/read-all", response_model=list[NotificationRead])
def mark_all_notifications_as_read(
    user_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> list[NotificationRead]:
    """Marca como leídas todas las notificaciones del usuario."""

    notifications = mark_all_as_read_uc(store, user_id)
    return [notification_to_schema(notification) for notification in notifications]


@router.post(
    "/notifications/",
    response_model=NotificationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_notification(
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Crea una notificación para un único usuario."""

    try:
        notification = create_notification_uc(
            store,
            user_id=payload.user_id,
            type=payload.type,
            title=payload.title,
            message=payload.message,
            priority=payload.priority,
            sender=sender_from_schema(payload.sender),
            link=payload.link,
            scheduled_for=payload.scheduled_for,
        )
    except NotificationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return notification_to_schema(notification)


@router.post(
    "/notifications/broadcast",
    response_model=list[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def broadcast_notification(
    payload: NotificationBroadcast,
    store: NotificationStore = Depends(get_notification_store),
    directory: UserDirectory = Depends(get_user_directory),
) -> list[NotificationRead]:
    """Envía una copia de la notificación a cada usuario del grupo destinatario."""

    try:
        notifications = broadcast_notification_uc(
            store,
            directory,
            type=payload.type,
            title=payload.title,
            message=payload.message,
            priority=payload.priority,
            sender=sender_from_schema(payload.sender),
            target_group=payload.target_group,
            scheduled_for=payload.scheduled_for,
        )
    except NotificationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return [notification_to_schema(notification) for notification in notifications]


@router.post("/notifications/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Marca una notificación como leída."""

    notification = mark_as_read_uc(store, notification_id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND_DETAIL)
    return notification_to_schema(notification)


@router.patch("/notifications/{notification_id}", response_model=NotificationRead)
def update_notification(
    notification_id: str,
    payload: NotificationUpdate,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Actualiza el contenido de una notificación existente."""

    try:
        notification = update_notification_uc(
            store,
            notification_id,
            **payload.model_dump(exclude_none=True),
        )
    except NotificationValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    except KeyValueStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORAGE_UNAVAILABLE_DETAIL,
        ) from exc
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND_DETAIL)
    return notification_to_schema(notification)


@router.delete("/notifications/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> Response:
    """Elimina una notificación."""

    try:
        deleted = delete_notification_uc(store, notification_id)
    except KeyValueStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=_STORAGE_UNAVAILABLE_DETAIL,
        ) from exc
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND_DETAIL)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
