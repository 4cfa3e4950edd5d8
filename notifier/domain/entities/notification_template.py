"""Domain entity describing a named notification template."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class NotificationTemplate:
    """Title/body pair with ``{placeholder}`` tokens identified by ``type``."""

    id: int | None
    type: str
    title: str
    body: str
    variables: list[str] = field(default_factory=list)
    description: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class RenderedMessage:
    """Title and body produced by substituting template variables."""

    title: str
    body: str


__all__ = ["NotificationTemplate", "RenderedMessage"]
