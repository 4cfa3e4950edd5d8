"""Device token registration."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from notifier.domain.entities import Recipient
from notifier.infrastructure.push import mask_token
from notifier.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def register_device_token(session: Session, user_id: int, device_token: str | None) -> Recipient:
    """Store (or clear, when empty) the push token of ``user_id``."""

    token = (device_token or "").strip() or None
    recipient = UserRepository(session).set_device_token(user_id, token)
    logger.info("Device token for user %s set to %s", user_id, mask_token(token))
    return recipient


__all__ = ["register_device_token"]
