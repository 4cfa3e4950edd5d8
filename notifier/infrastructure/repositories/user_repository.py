"""Read access to notification recipients and their job preferences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from notifier.domain.entities import (
    ROLE_BRANCH_ADMIN,
    ROLE_CANDIDATE,
    CandidateJobPreferences,
    Recipient,
)
from notifier.infrastructure.models import CandidateProfileModel, UserModel


class UserRepository:
    """Resolve device tokens and audiences for the dispatcher."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_device_token(self, user_id: int) -> str | None:
        token = (
            self.session.query(UserModel.device_token)
            .filter(UserModel.id == user_id)
            .scalar()
        )
        token = (token or "").strip()
        return token or None

    def get_map_by_ids(self, user_ids: Iterable[int]) -> dict[int, Recipient]:
        unique_ids = {int(user_id) for user_id in user_ids}
        if not unique_ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def set_device_token(self, user_id: int, device_token: str | None) -> Recipient:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.device_token = device_token
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create(
        self,
        *,
        name: str,
        role: str,
        email: str | None = None,
        city: str | None = None,
        device_token: str | None = None,
        is_active: bool = True,
        user_id: int | None = None,
    ) -> Recipient:
        model = UserModel(
            id=user_id,
            name=name,
            role=role.upper(),
            email=email,
            city=city,
            device_token=device_token,
            is_active=is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def save_candidate_preferences(
        self, preferences: CandidateJobPreferences
    ) -> CandidateJobPreferences:
        model = self.session.get(CandidateProfileModel, preferences.user_id)
        if model is None:
            model = CandidateProfileModel(user_id=preferences.user_id)
        model.preferred_titles = list(preferences.preferred_titles)
        model.preferred_locations = list(preferences.preferred_locations)
        model.preferred_industries = list(preferences.preferred_industries)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_preferences(model)

    def list_active_ids_by_role_and_city(self, role: str, city: str) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.role == role.upper())
            .filter(func.lower(UserModel.city) == city.strip().lower())
            .order_by(UserModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]

    def list_branch_admin_ids_for_city(self, city: str) -> list[int]:
        return self.list_active_ids_by_role_and_city(ROLE_BRANCH_ADMIN, city)

    def list_candidate_job_preferences(self) -> Sequence[CandidateJobPreferences]:
        query = (
            self.session.query(CandidateProfileModel)
            .join(UserModel, CandidateProfileModel.user_id == UserModel.id)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.role == ROLE_CANDIDATE)
            .order_by(CandidateProfileModel.user_id.asc())
        )
        return [self._to_preferences(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: UserModel) -> Recipient:
        return Recipient(
            id=model.id,
            name=model.name,
            email=model.email,
            role=model.role,
            city=model.city,
            device_token=model.device_token,
            is_active=bool(model.is_active),
        )

    @staticmethod
    def _to_preferences(model: CandidateProfileModel) -> CandidateJobPreferences:
        return CandidateJobPreferences(
            user_id=model.user_id,
            preferred_titles=list(model.preferred_titles or []),
            preferred_locations=list(model.preferred_locations or []),
            preferred_industries=list(model.preferred_industries or []),
        )


__all__ = ["UserRepository"]
