"""Closed enumeration of the notification types known to the engine."""

from __future__ import annotations

from enum import Enum

DEFAULT_DAILY_CAP = 10


class NotificationType(str, Enum):
    """Notification type carrying its preference category and daily cap.

    ``category`` names the :class:`UserNotificationPreference` flag consulted by
    the preference gate, or ``None`` when only the global push switch applies.
    ``daily_cap`` is ``None`` for types that use the configured default cap.
    """

    WELCOME = ("WELCOME", None, 1)
    JOB_ALERT = ("JOB_ALERT", "job_alerts", 2)
    APPLICATION_UPDATE = ("APPLICATION_UPDATE", "application_updates", None)
    INTERVIEW_SCHEDULED = ("INTERVIEW_SCHEDULED", "interview_reminders", None)
    PROFILE_UPDATE = ("PROFILE_UPDATE", "profile_updates", None)
    PROFILE_VIEWED = ("PROFILE_VIEWED", None, 5)
    NEW_APPLICATION = ("NEW_APPLICATION", None, None)
    JOB_APPROVED = ("JOB_APPROVED", None, None)
    JOB_REJECTED = ("JOB_REJECTED", None, None)
    JOB_VIEW_MILESTONE = ("JOB_VIEW_MILESTONE", None, None)
    JOB_BOOKMARKED = ("JOB_BOOKMARKED", None, None)
    JOB_VIEWED = ("JOB_VIEWED", None, None)
    JOB_CLOSED = ("JOB_CLOSED", None, None)
    SYSTEM = ("SYSTEM", "system_notifications", None)
    PROMOTIONAL = ("PROMOTIONAL", "promotional_offers", None)
    TEST = ("TEST", None, 10)
    ADMIN_ALERT = ("ADMIN_ALERT", None, None)
    NEW_EMPLOYER_REGISTERED = ("NEW_EMPLOYER_REGISTERED", None, None)
    NEW_CANDIDATE_REGISTERED = ("NEW_CANDIDATE_REGISTERED", None, None)
    NEW_AD_SUBMITTED = ("NEW_AD_SUBMITTED", None, None)

    def __new__(cls, value: str, category: str | None, daily_cap: int | None) -> "NotificationType":
        member = str.__new__(cls, value)
        member._value_ = value
        member.category = category
        member.daily_cap = daily_cap
        return member

    def __str__(self) -> str:
        return self.value

    def cap(self, default: int = DEFAULT_DAILY_CAP) -> int:
        """Return the daily cap of the type, falling back to ``default``."""

        return self.daily_cap if self.daily_cap is not None else default

    @classmethod
    def lookup(cls, value: "NotificationType | str") -> "NotificationType | None":
        """Return the member named by ``value`` or ``None`` when unknown."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


__all__ = ["DEFAULT_DAILY_CAP", "NotificationType"]
