"""Repository implementations for infrastructure layer."""

from .daily_notification_tracker_repository import DailyNotificationTrackerRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .notification_template_repository import NotificationTemplateRepository
from .user_repository import UserRepository

__all__ = [
    "DailyNotificationTrackerRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "NotificationTemplateRepository",
    "UserRepository",
]
