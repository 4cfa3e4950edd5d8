"""In-app notification list, read state and deletion."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifier.domain.entities import Notification, NotificationListing
from notifier.domain.errors import NotificationForbiddenError, NotificationNotFoundError
from notifier.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session, user_id: int, *, limit: int | None = None
) -> NotificationListing:
    """Return the notifications of ``user_id`` newest-first with the unread count."""

    repository = NotificationRepository(session)
    return NotificationListing(
        notifications=list(repository.list_for_user(user_id, limit=limit)),
        unread_count=repository.count_unread_for_user(user_id),
    )


def _get_owned(
    repository: NotificationRepository, user_id: int, notification_id: int, action: str
) -> Notification:
    notification = repository.get(notification_id)
    if notification is None:
        raise NotificationNotFoundError(notification_id)
    if notification.user_id != user_id:
        raise NotificationForbiddenError(notification_id, action)
    return notification


def mark_notification_read(session: Session, user_id: int, notification_id: int) -> None:
    repository = NotificationRepository(session)
    _get_owned(repository, user_id, notification_id, "update")
    repository.mark_as_read(notification_id)


def mark_all_notifications_read(session: Session, user_id: int) -> int:
    """Mark every unread notification of ``user_id`` as read; return how many."""

    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, user_id: int, notification_id: int) -> None:
    repository = NotificationRepository(session)
    _get_owned(repository, user_id, notification_id, "delete")
    repository.delete(notification_id)


__all__ = [
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
