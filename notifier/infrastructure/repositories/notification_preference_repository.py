"""Persistence helpers for user notification preferences."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifier.domain.entities import PREFERENCE_FLAGS, UserNotificationPreference
from notifier.infrastructure.models import UserNotificationPreferenceModel


class NotificationPreferenceRepository:
    """Load and upsert :class:`UserNotificationPreference` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> UserNotificationPreference | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def upsert(
        self, user_id: int, patch: dict[str, bool | None]
    ) -> UserNotificationPreference:
        """Apply ``patch`` to the stored row, creating it from defaults if needed."""

        try:
            return self._upsert(user_id, patch)
        except IntegrityError:
            # A concurrent request created the row first; apply the patch to it.
            self.session.rollback()
            return self._upsert(user_id, patch)

    def _upsert(
        self, user_id: int, patch: dict[str, bool | None]
    ) -> UserNotificationPreference:
        model = self._get_model(user_id)
        current = (
            self._to_entity(model) if model else UserNotificationPreference(user_id=user_id)
        )
        updated = current.apply(patch)
        if model is None:
            model = UserNotificationPreferenceModel(user_id=user_id)
        for name in PREFERENCE_FLAGS:
            setattr(model, name, getattr(updated, name))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: int) -> UserNotificationPreferenceModel | None:
        return (
            self.session.query(UserNotificationPreferenceModel)
            .filter(UserNotificationPreferenceModel.user_id == user_id)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: UserNotificationPreferenceModel) -> UserNotificationPreference:
        values = {name: bool(getattr(model, name)) for name in PREFERENCE_FLAGS}
        return UserNotificationPreference(user_id=model.user_id, **values)


__all__ = ["NotificationPreferenceRepository"]
