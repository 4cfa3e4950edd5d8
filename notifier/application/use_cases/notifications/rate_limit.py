"""Per-type daily push quotas."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from notifier.config import get_settings
from notifier.domain.entities import GateDecision, NotificationType
from notifier.infrastructure.repositories import DailyNotificationTrackerRepository
from notifier.utils import today_in_app_timezone

logger = logging.getLogger(__name__)


def daily_cap_for(notification_type: NotificationType) -> int:
    return notification_type.cap(get_settings().default_daily_cap)


def evaluate_rate_limit(
    session: Session,
    user_id: int,
    notification_type: NotificationType,
    *,
    day: date | None = None,
) -> GateDecision:
    """Allow while today's counter for the user and type is below the cap."""

    day = day or today_in_app_timezone()
    try:
        count = DailyNotificationTrackerRepository(session).get_count(
            user_id=user_id, notification_type=notification_type.value, day=day
        )
    except Exception:
        session.rollback()
        logger.exception(
            "Rate limit lookup failed for user %s and %s; allowing", user_id, notification_type
        )
        return GateDecision.ALLOW_ON_ERROR

    if count is None or count < daily_cap_for(notification_type):
        return GateDecision.ALLOW
    return GateDecision.DENY


def check_limit(
    session: Session,
    user_id: int,
    notification_type: NotificationType,
    *,
    day: date | None = None,
) -> bool:
    return evaluate_rate_limit(session, user_id, notification_type, day=day).allowed


def record_send(
    session: Session,
    user_id: int,
    notification_type: NotificationType,
    *,
    day: date | None = None,
) -> int | None:
    """Count one delivered push and return the new counter.

    Returns ``None`` when the counter could not be updated; the failure is
    logged and otherwise ignored.
    """

    day = day or today_in_app_timezone()
    try:
        return DailyNotificationTrackerRepository(session).increment(
            user_id=user_id, notification_type=notification_type.value, day=day
        )
    except Exception:
        session.rollback()
        logger.exception(
            "Failed to record %s push for user %s on %s", notification_type, user_id, day
        )
        return None


__all__ = ["check_limit", "daily_cap_for", "evaluate_rate_limit", "record_send"]
