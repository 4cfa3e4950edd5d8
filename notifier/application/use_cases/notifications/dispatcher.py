"""Render, persist, gate and deliver notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from sqlalchemy.orm import Session

from notifier.domain.entities import (
    REASON_BLOCKED_BY_PREFERENCES,
    REASON_DELIVERY_FAILED,
    REASON_NO_DEVICE_TOKEN,
    REASON_RATE_LIMIT_EXCEEDED,
    REASON_UNKNOWN_USER,
    BulkDispatchResult,
    DispatchResult,
    Notification,
    NotificationType,
    RecipientOutcome,
    RenderedMessage,
)
from notifier.infrastructure.push import DeliveryChannel, PushDeliveryError, stringify_data
from notifier.infrastructure.repositories import NotificationRepository, UserRepository
from notifier.utils import now_in_app_timezone

from .preferences import evaluate_preferences
from .rate_limit import evaluate_rate_limit, record_send
from .templates import render, resolve_template

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Deliver template notifications to users.

    Every dispatch whose template renders leaves an in-app record, whatever
    happens afterwards. Push delivery is then attempted only when the
    preference gate and the daily quota allow it and the user has a device
    token. Soft blocks are reported through :class:`DispatchResult`; a failing
    push channel raises :class:`PushDeliveryError`.
    """

    def __init__(self, session: Session, channel: DeliveryChannel) -> None:
        self.session = session
        self.channel = channel

    def dispatch(
        self,
        user_id: int,
        notification_type: NotificationType | str,
        variables: Mapping[str, Any] | None = None,
        *,
        options: Mapping[str, Any] | None = None,
    ) -> DispatchResult:
        member, template = resolve_template(self.session, notification_type)
        variables = dict(variables or {})
        message = render(template, variables)
        notification = self._persist(user_id, member, message, variables)

        gates: dict[str, str] = {}
        preference_decision = evaluate_preferences(self.session, user_id, member)
        gates["preferences"] = preference_decision.value
        if not preference_decision.allowed:
            logger.info("Push %s for user %s blocked by preferences", member, user_id)
            return DispatchResult(
                success=False,
                notification=notification,
                reason=REASON_BLOCKED_BY_PREFERENCES,
                gates=gates,
            )

        rate_decision = evaluate_rate_limit(self.session, user_id, member)
        gates["rate_limit"] = rate_decision.value
        if not rate_decision.allowed:
            logger.info("Push %s for user %s exceeds the daily limit", member, user_id)
            return DispatchResult(
                success=False,
                notification=notification,
                reason=REASON_RATE_LIMIT_EXCEEDED,
                gates=gates,
            )

        device_token = UserRepository(self.session).get_device_token(user_id)
        if not device_token:
            logger.info("User %s has no device token; %s kept in-app only", user_id, member)
            return DispatchResult(
                success=False,
                notification=notification,
                reason=REASON_NO_DEVICE_TOKEN,
                gates=gates,
            )

        try:
            result = self.channel.send(
                device_token,
                message.title,
                message.body,
                self._push_data(member, variables, user_id=user_id),
                options,
            )
        except PushDeliveryError as exc:
            exc.notification = notification
            logger.error("Push %s for user %s failed: %s", member, user_id, exc)
            raise

        record_send(self.session, user_id, member)
        return DispatchResult(
            success=True, notification=notification, result=result, gates=gates
        )

    def dispatch_to_many(
        self,
        user_ids: Iterable[int],
        notification_type: NotificationType | str,
        variables: Mapping[str, Any] | None = None,
        *,
        per_user_variables: Mapping[int, Mapping[str, Any]] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> BulkDispatchResult:
        """Dispatch to each user in turn; one failure never affects the others."""

        member, _ = resolve_template(self.session, notification_type)
        aggregate = BulkDispatchResult()
        for user_id in _unique_ids(user_ids):
            merged = {
                **(variables or {}),
                **((per_user_variables or {}).get(user_id) or {}),
            }
            try:
                result = self.dispatch(user_id, member, merged, options=options)
            except PushDeliveryError as exc:
                notification = exc.notification
                aggregate.add(
                    RecipientOutcome(
                        user_id=user_id,
                        success=False,
                        reason=REASON_DELIVERY_FAILED,
                        notification_id=notification.id if notification else None,
                        error=str(exc),
                    )
                )
                continue
            except Exception as exc:
                self.session.rollback()
                logger.exception("Dispatch of %s to user %s failed", member, user_id)
                aggregate.add(
                    RecipientOutcome(
                        user_id=user_id,
                        success=False,
                        reason=REASON_DELIVERY_FAILED,
                        error=str(exc),
                    )
                )
                continue

            aggregate.add(
                RecipientOutcome(
                    user_id=user_id,
                    success=result.success,
                    reason=result.reason,
                    notification_id=result.notification.id,
                )
            )

        logger.info(
            "Dispatched %s to %s users: %s pushed, %s not pushed",
            member,
            aggregate.total,
            aggregate.success_count,
            aggregate.failure_count,
        )
        return aggregate

    def broadcast(
        self,
        user_ids: Iterable[int],
        notification_type: NotificationType | str,
        variables: Mapping[str, Any] | None = None,
        *,
        options: Mapping[str, Any] | None = None,
    ) -> BulkDispatchResult:
        """Send one rendered message to many users with a single multicast call.

        Each user still gets an in-app record and passes through both gates.
        The multicast payload carries ``type`` and ``timestamp`` but no
        ``userId`` since it is shared by every recipient.
        """

        member, template = resolve_template(self.session, notification_type)
        variables = dict(variables or {})
        message = render(template, variables)
        ids = _unique_ids(user_ids)
        recipients = UserRepository(self.session).get_map_by_ids(ids)

        aggregate = BulkDispatchResult()
        for user_id in ids:
            if user_id not in recipients:
                logger.info("Skipping %s for unknown user %s", member, user_id)
                aggregate.add(
                    RecipientOutcome(user_id=user_id, success=False, reason=REASON_UNKNOWN_USER)
                )

        records = NotificationRepository(self.session).create_many(
            [
                self._build_notification(user_id, member, message, variables)
                for user_id in ids
                if user_id in recipients
            ]
        )

        eligible: list[tuple[Notification, str]] = []
        for record in records:
            user_id = record.user_id
            if not evaluate_preferences(self.session, user_id, member).allowed:
                aggregate.add(_blocked(record, REASON_BLOCKED_BY_PREFERENCES))
                continue
            if not evaluate_rate_limit(self.session, user_id, member).allowed:
                aggregate.add(_blocked(record, REASON_RATE_LIMIT_EXCEEDED))
                continue
            token = (recipients[user_id].device_token or "").strip()
            if not token:
                aggregate.add(_blocked(record, REASON_NO_DEVICE_TOKEN))
                continue
            eligible.append((record, token))

        if not eligible:
            return aggregate

        try:
            multicast = self.channel.send_multicast(
                [token for _, token in eligible],
                message.title,
                message.body,
                self._push_data(member, variables),
                options,
            )
        except PushDeliveryError as exc:
            logger.error("Multicast %s to %s users failed: %s", member, len(eligible), exc)
            for record, _ in eligible:
                aggregate.add(
                    RecipientOutcome(
                        user_id=record.user_id,
                        success=False,
                        reason=REASON_DELIVERY_FAILED,
                        notification_id=record.id,
                        error=str(exc),
                    )
                )
            return aggregate

        for (record, _), response in zip(eligible, multicast.responses):
            if response.success:
                record_send(self.session, record.user_id, member)
            aggregate.add(
                RecipientOutcome(
                    user_id=record.user_id,
                    success=response.success,
                    reason=None if response.success else REASON_DELIVERY_FAILED,
                    notification_id=record.id,
                    error=response.error,
                )
            )
        return aggregate

    def _persist(
        self,
        user_id: int,
        notification_type: NotificationType,
        message: RenderedMessage,
        variables: dict[str, Any],
    ) -> Notification:
        return NotificationRepository(self.session).create(
            self._build_notification(user_id, notification_type, message, variables)
        )

    @staticmethod
    def _build_notification(
        user_id: int,
        notification_type: NotificationType,
        message: RenderedMessage,
        variables: dict[str, Any],
    ) -> Notification:
        return Notification(
            id=None,
            user_id=user_id,
            type=notification_type.value,
            title=message.title,
            message=message.body,
            data=_json_payload(variables),
            read=False,
            created_at=now_in_app_timezone(),
        )

    @staticmethod
    def _push_data(
        notification_type: NotificationType,
        variables: Mapping[str, Any],
        *,
        user_id: int | None = None,
    ) -> dict[str, str]:
        data = stringify_data(variables)
        data["type"] = notification_type.value
        if user_id is not None:
            data["userId"] = str(user_id)
        data["timestamp"] = now_in_app_timezone().isoformat()
        return data


def _json_payload(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-storable copy of ``values`` with dates as ISO strings."""

    return {str(key): _normalize_date_values(value) for key, value in values.items()}


def _normalize_date_values(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(key): _normalize_date_values(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_date_values(item) for item in value]
    return value


def _blocked(record: Notification, reason: str) -> RecipientOutcome:
    return RecipientOutcome(
        user_id=record.user_id,
        success=False,
        reason=reason,
        notification_id=record.id,
    )


def _unique_ids(user_ids: Iterable[int]) -> list[int]:
    unique: list[int] = []
    seen: set[int] = set()
    for user_id in user_ids:
        if user_id is None or user_id in seen:
            continue
        seen.add(user_id)
        unique.append(user_id)
    return unique


__all__ = ["NotificationDispatcher"]
