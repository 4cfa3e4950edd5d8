"""Persistence helpers for the per-day push counters."""

from __future__ import annotations

from datetime import date

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifier.infrastructure.models import DailyNotificationTrackerModel


class DailyNotificationTrackerRepository:
    """Read and increment :class:`DailyNotificationTrackerModel` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_count(self, *, user_id: int, notification_type: str, day: date) -> int | None:
        """Return the counter for the key or ``None`` when no row exists."""

        statement = select(DailyNotificationTrackerModel.count).where(
            *self._key(user_id, notification_type, day)
        )
        return self.session.execute(statement).scalar_one_or_none()

    def increment(self, *, user_id: int, notification_type: str, day: date) -> int:
        """Add one to the counter of the key and return the new value.

        The increment runs as ``count = count + 1`` in the database. When the row
        does not exist yet it is inserted with ``count = 1``; if a concurrent
        transaction inserted it first, the unique key violation is rolled back
        and the increment retried.
        """

        try:
            count = self._increment_or_insert(user_id, notification_type, day)
        except IntegrityError:
            self.session.rollback()
            count = self._increment_or_insert(user_id, notification_type, day)
        self.session.commit()
        return count

    def _increment_or_insert(self, user_id: int, notification_type: str, day: date) -> int:
        key = self._key(user_id, notification_type, day)
        result = self.session.execute(
            update(DailyNotificationTrackerModel)
            .where(*key)
            .values(count=DailyNotificationTrackerModel.count + 1)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            self.session.execute(
                insert(DailyNotificationTrackerModel).values(
                    user_id=user_id,
                    notification_type=notification_type,
                    date=day,
                    count=1,
                )
            )
        statement = select(DailyNotificationTrackerModel.count).where(*key)
        return int(self.session.execute(statement).scalar_one())

    @staticmethod
    def _key(user_id: int, notification_type: str, day: date):
        return (
            DailyNotificationTrackerModel.user_id == user_id,
            DailyNotificationTrackerModel.notification_type == str(notification_type),
            DailyNotificationTrackerModel.date == day,
        )


__all__ = ["DailyNotificationTrackerRepository"]
