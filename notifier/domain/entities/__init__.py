"""Domain entities exposed by the application."""

from .dispatch import (
    REASON_BLOCKED_BY_PREFERENCES,
    REASON_DELIVERY_FAILED,
    REASON_NO_DEVICE_TOKEN,
    REASON_RATE_LIMIT_EXCEEDED,
    REASON_UNKNOWN_USER,
    BulkDispatchResult,
    DispatchResult,
    MulticastResult,
    PushResult,
    PushTokenResult,
    RecipientOutcome,
)
from .gate import GateDecision
from .notification import Notification, NotificationListing
from .notification_preference import PREFERENCE_FLAGS, UserNotificationPreference
from .notification_template import NotificationTemplate, RenderedMessage
from .notification_type import DEFAULT_DAILY_CAP, NotificationType
from .recipient import (
    ROLE_ADMIN,
    ROLE_BRANCH_ADMIN,
    ROLE_CANDIDATE,
    ROLE_EMPLOYER,
    CandidateJobPreferences,
    JobPosting,
    Recipient,
)

__all__ = [
    "BulkDispatchResult",
    "CandidateJobPreferences",
    "DEFAULT_DAILY_CAP",
    "DispatchResult",
    "GateDecision",
    "JobPosting",
    "MulticastResult",
    "Notification",
    "NotificationListing",
    "NotificationTemplate",
    "NotificationType",
    "PREFERENCE_FLAGS",
    "PushResult",
    "PushTokenResult",
    "REASON_BLOCKED_BY_PREFERENCES",
    "REASON_DELIVERY_FAILED",
    "REASON_NO_DEVICE_TOKEN",
    "REASON_RATE_LIMIT_EXCEEDED",
    "REASON_UNKNOWN_USER",
    "ROLE_ADMIN",
    "ROLE_BRANCH_ADMIN",
    "ROLE_CANDIDATE",
    "ROLE_EMPLOYER",
    "Recipient",
    "RecipientOutcome",
    "RenderedMessage",
    "UserNotificationPreference",
]
