"""ORM models used by the application infrastructure."""

from .daily_notification_tracker import DailyNotificationTrackerModel
from .notification import NotificationModel
from .notification_preference import UserNotificationPreferenceModel
from .notification_template import NotificationTemplateModel
from .user import CandidateProfileModel, UserModel

__all__ = [
    "CandidateProfileModel",
    "DailyNotificationTrackerModel",
    "NotificationModel",
    "NotificationTemplateModel",
    "UserModel",
    "UserNotificationPreferenceModel",
]
