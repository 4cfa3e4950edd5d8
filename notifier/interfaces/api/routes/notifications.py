"""Endpoints for in-app notifications, preferences and push delivery."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from notifier.application.use_cases.notifications import (
    NotificationDispatcher,
    delete_notification,
    get_preferences,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    register_device_token,
    update_preferences,
)
from notifier.domain.entities import REASON_NO_DEVICE_TOKEN, NotificationType
from notifier.domain.errors import (
    NotificationForbiddenError,
    NotificationNotFoundError,
    TemplateNotFoundError,
)
from notifier.infrastructure.database import get_db
from notifier.infrastructure.push import DeliveryChannel, PushDeliveryError
from notifier.interfaces.api.dependencies import (
    Principal,
    get_current_principal,
    get_push_channel,
    require_dispatch_role,
)
from notifier.interfaces.api.schemas import (
    BulkDispatchRead,
    DeviceTokenUpdate,
    DispatchRequest,
    DispatchResponse,
    MessageResponse,
    NotificationListRead,
    NotificationPreferenceRead,
    NotificationPreferenceResponse,
    NotificationPreferenceUpdate,
    PushDeliveryRead,
    PushDeliveryResponse,
)
from notifier.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListRead)
def read_notifications(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationListRead:
    """Return the caller's notifications newest-first with the unread count."""

    listing = list_notifications(db, principal.user_id)
    return NotificationListRead.model_validate(listing)


@router.patch("/read-all", response_model=MessageResponse)
def read_all_notifications(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> MessageResponse:
    updated = mark_all_notifications_read(db, principal.user_id)
    return MessageResponse(
        message="All notifications marked as read", data={"updated": updated}
    )


@router.get("/preferences", response_model=NotificationPreferenceRead)
def read_preferences(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationPreferenceRead:
    return NotificationPreferenceRead.model_validate(get_preferences(db, principal.user_id))


@router.put("/preferences", response_model=NotificationPreferenceResponse)
def write_preferences(
    payload: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> NotificationPreferenceResponse:
    """Apply the provided flags; omitted flags keep their current value."""

    preferences = update_preferences(
        db, principal.user_id, payload.model_dump(exclude_unset=True)
    )
    return NotificationPreferenceResponse(
        message="Notification preferences updated",
        data=NotificationPreferenceRead.model_validate(preferences),
    )


@router.put("/device-token", response_model=MessageResponse)
def write_device_token(
    payload: DeviceTokenUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> MessageResponse:
    try:
        recipient = register_device_token(db, principal.user_id, payload.device_token)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    message = "Device token registered" if recipient.device_token else "Device token removed"
    return MessageResponse(message=message)


@router.post("/push/test", response_model=PushDeliveryResponse)
def send_test_push(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    channel: DeliveryChannel = Depends(get_push_channel),
) -> PushDeliveryResponse:
    """Send the test template to the caller's registered device."""

    dispatcher = NotificationDispatcher(db, channel)
    try:
        result = dispatcher.dispatch(
            principal.user_id,
            NotificationType.TEST,
            {"sentAt": now_in_app_timezone()},
        )
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except PushDeliveryError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to send push notification: {exc.message}",
        ) from exc

    if result.reason == REASON_NO_DEVICE_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No device token registered for this user",
        )

    data = PushDeliveryRead(
        success=result.success,
        notification_id=result.notification.id,
        message_id=result.result.message_id if result.result else None,
        reason=result.reason,
        gates=result.gates,
    )
    message = "Test notification sent" if result.success else "Test notification not pushed"
    return PushDeliveryResponse(message=message, data=data)


@router.post("/dispatch", response_model=DispatchResponse)
def dispatch_notifications(
    payload: DispatchRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_dispatch_role),
    channel: DeliveryChannel = Depends(get_push_channel),
) -> DispatchResponse:
    """Render a template for each user id and push it where allowed."""

    dispatcher = NotificationDispatcher(db, channel)
    try:
        if payload.mode == "multicast":
            aggregate = dispatcher.broadcast(
                payload.user_ids, payload.type, payload.variables, options=payload.options
            )
        else:
            aggregate = dispatcher.dispatch_to_many(
                payload.user_ids, payload.type, payload.variables, options=payload.options
            )
    except TemplateNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info(
        "User %s dispatched %s to %s users", principal.user_id, payload.type, aggregate.total
    )
    return DispatchResponse(
        message=f"Notifications sent to {aggregate.success_count}/{aggregate.total} users",
        data=BulkDispatchRead.model_validate(aggregate.as_dict()),
    )


@router.patch("/{notification_id}/read", response_model=MessageResponse)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> MessageResponse:
    try:
        mark_notification_read(db, principal.user_id, notification_id)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotificationForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return MessageResponse(message="Notification marked as read")


@router.delete("/{notification_id}", response_model=MessageResponse)
def remove_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> MessageResponse:
    try:
        delete_notification(db, principal.user_id, notification_id)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotificationForbiddenError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return MessageResponse(message="Notification deleted")
