"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Message persisted for a specific user, independent of push delivery."""

    id: int | None
    user_id: int
    type: str
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    read: bool = False
    created_at: datetime | None = None


@dataclass
class NotificationListing:
    """Notifications of a user ordered newest-first plus the unread total."""

    notifications: list[Notification]
    unread_count: int


__all__ = ["Notification", "NotificationListing"]
