"""Preference gate and the preference read/patch use cases."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.orm import Session

from notifier.domain.entities import GateDecision, NotificationType, UserNotificationPreference
from notifier.infrastructure.repositories import NotificationPreferenceRepository

logger = logging.getLogger(__name__)


def evaluate_preferences(
    session: Session, user_id: int, notification_type: NotificationType
) -> GateDecision:
    """Decide whether ``user_id`` accepts push notifications of this type.

    Users without a stored row accept everything. ``push_notifications`` off
    denies every type; otherwise the category flag of the type decides. Lookup
    failures allow delivery and are reported as ``ALLOW_ON_ERROR``.
    """

    try:
        preferences = NotificationPreferenceRepository(session).get(user_id)
    except Exception:
        session.rollback()
        logger.exception(
            "Preference lookup failed for user %s; allowing %s", user_id, notification_type
        )
        return GateDecision.ALLOW_ON_ERROR

    if preferences is None:
        return GateDecision.ALLOW
    if not preferences.push_notifications:
        return GateDecision.DENY

    category = notification_type.category
    if category is None:
        return GateDecision.ALLOW
    return GateDecision.ALLOW if getattr(preferences, category) else GateDecision.DENY


def can_send(session: Session, user_id: int, notification_type: NotificationType) -> bool:
    return evaluate_preferences(session, user_id, notification_type).allowed


def get_preferences(session: Session, user_id: int) -> UserNotificationPreference:
    """Return the stored preferences or the defaults for users without a row."""

    stored = NotificationPreferenceRepository(session).get(user_id)
    return stored or UserNotificationPreference(user_id=user_id)


def update_preferences(
    session: Session, user_id: int, patch: Mapping[str, bool | None]
) -> UserNotificationPreference:
    """Upsert the preferences of ``user_id`` applying only the provided flags."""

    return NotificationPreferenceRepository(session).upsert(user_id, dict(patch))


__all__ = ["can_send", "evaluate_preferences", "get_preferences", "update_preferences"]
