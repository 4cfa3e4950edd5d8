"""Exceptions raised by the notification use cases."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification domain errors."""


class TemplateNotFoundError(NotificationError):
    """No active template exists for the requested notification type."""

    def __init__(self, notification_type: str) -> None:
        self.notification_type = str(notification_type)
        super().__init__(
            f"No active notification template for type '{self.notification_type}'"
        )


class NotificationNotFoundError(NotificationError):
    """The requested notification does not exist."""

    def __init__(self, notification_id: int) -> None:
        self.notification_id = notification_id
        super().__init__("Notification not found")


class NotificationForbiddenError(NotificationError):
    """The notification belongs to a different user."""

    def __init__(self, notification_id: int, action: str = "update") -> None:
        self.notification_id = notification_id
        super().__init__(f"You do not have permission to {action} this notification")


__all__ = [
    "NotificationError",
    "NotificationForbiddenError",
    "NotificationNotFoundError",
    "TemplateNotFoundError",
]
