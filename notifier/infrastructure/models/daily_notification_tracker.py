"""SQLAlchemy model counting push sends per user, type and day."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String

from notifier.infrastructure.database import Base


class DailyNotificationTrackerModel(Base):
    """Daily send counter; a new day is a new composite key."""

    __tablename__ = "daily_notification_tracker"

    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    notification_type = Column(String(50), primary_key=True)
    date = Column(Date, primary_key=True)
    count = Column(Integer, nullable=False, default=0)


__all__ = ["DailyNotificationTrackerModel"]
