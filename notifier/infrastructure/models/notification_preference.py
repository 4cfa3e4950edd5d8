"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_timezone


def _flag(default: bool) -> Column:
    server_default = expression.true() if default else expression.false()
    return Column(Boolean, nullable=False, default=default, server_default=server_default)


class UserNotificationPreferenceModel(Base):
    """Opt-in flags of a user; a missing row means the defaults apply."""

    __tablename__ = "user_notification_preference"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    push_notifications = _flag(True)
    email_notifications = _flag(True)
    sms_notifications = _flag(False)
    job_alerts = _flag(True)
    application_updates = _flag(True)
    interview_reminders = _flag(True)
    profile_updates = _flag(True)
    system_notifications = _flag(True)
    promotional_offers = _flag(True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["UserNotificationPreferenceModel"]
