"""Domain entity for per-user notification opt-in flags."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

PREFERENCE_FLAGS = (
    "push_notifications",
    "email_notifications",
    "sms_notifications",
    "job_alerts",
    "application_updates",
    "interview_reminders",
    "profile_updates",
    "system_notifications",
    "promotional_offers",
)


@dataclass
class UserNotificationPreference:
    """Channel and category switches of a user.

    The defaults are the values reported for users that never saved their
    preferences. SMS is opt-in; every other flag starts enabled.
    """

    user_id: int
    push_notifications: bool = True
    email_notifications: bool = True
    sms_notifications: bool = False
    job_alerts: bool = True
    application_updates: bool = True
    interview_reminders: bool = True
    profile_updates: bool = True
    system_notifications: bool = True
    promotional_offers: bool = True

    def apply(self, patch: dict[str, bool | None]) -> "UserNotificationPreference":
        """Return a copy with the non-null known entries of ``patch`` applied."""

        known = {item.name for item in fields(self)} - {"user_id"}
        values = asdict(self)
        for name, value in patch.items():
            if name in known and value is not None:
                values[name] = bool(value)
        return UserNotificationPreference(**values)


__all__ = ["PREFERENCE_FLAGS", "UserNotificationPreference"]
