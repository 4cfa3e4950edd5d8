"""SQLAlchemy models for notification recipients."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from notifier.infrastructure.database import Base
from notifier.utils import now_in_app_timezone


class UserModel(Base):
    """Marketplace user as seen by the notification engine."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True, index=True)
    role = Column(String(20), nullable=False, index=True)
    city = Column(String(120), nullable=True, index=True)
    device_token = Column(String(512), nullable=True)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )

    candidate_profile = relationship(
        "CandidateProfileModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CandidateProfileModel(Base):
    """Job preferences of a candidate used to target job alerts."""

    __tablename__ = "candidate_profile"

    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    preferred_titles = Column(JSON, nullable=False, default=list)
    preferred_locations = Column(JSON, nullable=False, default=list)
    preferred_industries = Column(JSON, nullable=False, default=list)

    user = relationship("UserModel", back_populates="candidate_profile")


__all__ = ["CandidateProfileModel", "UserModel"]
