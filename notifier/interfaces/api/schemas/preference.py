"""Pydantic models for notification preferences."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .base import CamelModel


class NotificationPreferenceRead(CamelModel):
    push_notifications: bool
    email_notifications: bool
    sms_notifications: bool
    job_alerts: bool
    application_updates: bool
    interview_reminders: bool
    profile_updates: bool
    system_notifications: bool
    promotional_offers: bool


class NotificationPreferenceUpdate(CamelModel):
    """Partial update; omitted or null flags keep their current value."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    push_notifications: bool | None = None
    email_notifications: bool | None = None
    sms_notifications: bool | None = None
    job_alerts: bool | None = None
    application_updates: bool | None = None
    interview_reminders: bool | None = None
    profile_updates: bool | None = None
    system_notifications: bool | None = None
    promotional_offers: bool | None = None


class NotificationPreferenceResponse(BaseModel):
    message: str
    data: NotificationPreferenceRead


__all__ = [
    "NotificationPreferenceRead",
    "NotificationPreferenceResponse",
    "NotificationPreferenceUpdate",
]
