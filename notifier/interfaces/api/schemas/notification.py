"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    type: str
    title: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
    read: bool
    created_at: datetime


class NotificationListRead(CamelModel):
    notifications: list[NotificationRead]
    unread_count: int


class DeviceTokenUpdate(CamelModel):
    device_token: str | None = Field(default=None, max_length=512)


__all__ = ["DeviceTokenUpdate", "NotificationListRead", "NotificationRead"]
