"""SQLAlchemy model for notification templates."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_timezone


class NotificationTemplateModel(Base):
    """Named title/body template; ``type`` is unique."""

    __tablename__ = "notification_template"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(50), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    variables = Column(JSON, nullable=False, default=list)
    description = Column(String(255), nullable=True)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["NotificationTemplateModel"]
