"""Persistence helpers for notification templates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import delete
from sqlalchemy.orm import Session

from notifier.domain.entities import NotificationTemplate
from notifier.infrastructure.models import NotificationTemplateModel
from notifier.utils import ensure_app_timezone


class NotificationTemplateRepository:
    """Read and maintain the template catalog."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, include_inactive: bool = True) -> Sequence[NotificationTemplate]:
        query = self.session.query(NotificationTemplateModel)
        if not include_inactive:
            query = query.filter(NotificationTemplateModel.is_active.is_(True))
        query = query.order_by(NotificationTemplateModel.type.asc())
        return [self._to_entity(model) for model in query.all()]

    def get_active_by_type(self, notification_type: str) -> NotificationTemplate | None:
        model = self._get_model(notification_type)
        if model is None or not model.is_active:
            return None
        return self._to_entity(model)

    def set_active(self, notification_type: str, is_active: bool) -> NotificationTemplate:
        model = self._get_model(notification_type)
        if model is None:
            msg = f"Notification template '{notification_type}' not found"
            raise ValueError(msg)
        model.is_active = is_active
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def replace_all(self, templates: Iterable[NotificationTemplate]) -> int:
        """Delete every template and insert ``templates`` in one transaction."""

        self.session.execute(delete(NotificationTemplateModel))
        count = 0
        for template in templates:
            self.session.add(
                NotificationTemplateModel(
                    type=template.type,
                    title=template.title,
                    body=template.body,
                    variables=list(template.variables or []),
                    description=template.description,
                    is_active=template.is_active,
                )
            )
            count += 1
        self.session.commit()
        return count

    def _get_model(self, notification_type: str) -> NotificationTemplateModel | None:
        return (
            self.session.query(NotificationTemplateModel)
            .filter(NotificationTemplateModel.type == str(notification_type))
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: NotificationTemplateModel) -> NotificationTemplate:
        return NotificationTemplate(
            id=model.id,
            type=model.type,
            title=model.title,
            body=model.body,
            variables=list(model.variables or []),
            description=model.description,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationTemplateRepository"]
