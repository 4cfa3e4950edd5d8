"""Firebase Cloud Messaging implementation of the delivery channel."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import firebase_admin
from firebase_admin import credentials, messaging
from firebase_admin.exceptions import FirebaseError

from notifier.config import Settings, get_settings
from notifier.domain.entities import MulticastResult, PushResult, PushTokenResult
from notifier.utils import now_in_app_timezone

from .channel import PushConfigurationError, PushDeliveryError, mask_token, stringify_data

logger = logging.getLogger(__name__)

_MIN_TOKEN_LENGTH = 10
_COLLAPSE_KEY = "job_marketplace_notification"


class FirebasePushChannel:
    """Send push notifications through the Firebase Admin SDK.

    The firebase app is created lazily on first use, or eagerly by ``open``,
    and deleted by ``close``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._app: firebase_admin.App | None = None

    def open(self) -> None:
        self._ensure_app()

    def close(self) -> None:
        if self._app is None:
            return
        firebase_admin.delete_app(self._app)
        self._app = None
        logger.info("Firebase push channel closed")

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: Mapping[str, str],
        platform_options: Mapping[str, Any] | None = None,
    ) -> PushResult:
        if not device_token:
            raise PushDeliveryError("Device token is required", code="invalid-argument")
        if not isinstance(device_token, str) or len(device_token) < _MIN_TOKEN_LENGTH:
            raise PushDeliveryError("Invalid device token format", code="invalid-argument")

        app = self._ensure_app()
        message = messaging.Message(
            token=device_token,
            notification=messaging.Notification(title=title, body=body),
            data=stringify_data(data),
            android=self._android_config(title, body, platform_options),
            apns=self._apns_config(title, body, platform_options),
        )

        try:
            message_id = messaging.send(message, app=app)
        except FirebaseError as exc:
            logger.error(
                "Push notification failed for token %s: [%s] %s",
                mask_token(device_token),
                exc.code,
                exc,
            )
            raise PushDeliveryError(str(exc), code=exc.code) from exc

        logger.info("Push notification %s sent to %s", message_id, mask_token(device_token))
        return PushResult(message_id=message_id, timestamp=now_in_app_timezone())

    def send_multicast(
        self,
        device_tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, str],
        platform_options: Mapping[str, Any] | None = None,
    ) -> MulticastResult:
        tokens = [token for token in device_tokens if token]
        if not tokens:
            return MulticastResult(
                success_count=0, failure_count=0, responses=[], timestamp=now_in_app_timezone()
            )

        app = self._ensure_app()
        payload = stringify_data(data)
        payload.setdefault("timestamp", now_in_app_timezone().isoformat())
        notification = messaging.Notification(title=title, body=body)
        android = self._android_config(title, body, platform_options)
        apns = self._apns_config(title, body, platform_options)
        messages = [
            messaging.Message(
                token=token, notification=notification, data=payload, android=android, apns=apns
            )
            for token in tokens
        ]

        try:
            batch = messaging.send_each(messages, app=app)
        except FirebaseError as exc:
            logger.error("Multicast push notification failed: [%s] %s", exc.code, exc)
            raise PushDeliveryError(str(exc), code=exc.code) from exc

        responses = [
            PushTokenResult(
                device_token=token,
                success=bool(response.success),
                message_id=response.message_id,
                error=str(response.exception) if response.exception else None,
            )
            for token, response in zip(tokens, batch.responses)
        ]
        logger.info(
            "Multicast push notifications sent: %s succeeded, %s failed of %s tokens",
            batch.success_count,
            batch.failure_count,
            len(tokens),
        )
        return MulticastResult(
            success_count=batch.success_count,
            failure_count=batch.failure_count,
            responses=responses,
            timestamp=now_in_app_timezone(),
        )

    def _ensure_app(self) -> firebase_admin.App:
        if self._app is not None:
            return self._app

        account = self._settings.firebase_service_account()
        if account is None:
            raise PushConfigurationError(
                "FIREBASE_SERVICE_ACCOUNT_KEY environment variable is required"
            )

        name = self._settings.firebase_app_name
        try:
            self._app = firebase_admin.get_app(name)
        except ValueError:
            self._app = firebase_admin.initialize_app(
                credentials.Certificate(account),
                options={"projectId": account["project_id"]},
                name=name,
            )
        logger.info(
            "Firebase Admin SDK initialized for project %s", account["project_id"]
        )
        return self._app

    def _android_config(
        self, title: str, body: str, platform_options: Mapping[str, Any] | None
    ) -> messaging.AndroidConfig:
        notification_options: dict[str, Any] = {
            "title": title,
            "body": body,
            "icon": "ic_stat_notification",
            "color": self._settings.push_android_color,
            "sound": "default",
            "channel_id": "default",
            "priority": "high",
            "visibility": "public",
        }
        notification_options.update((platform_options or {}).get("android") or {})
        return messaging.AndroidConfig(
            priority="high",
            ttl=self._settings.push_ttl_seconds,
            collapse_key=_COLLAPSE_KEY,
            notification=messaging.AndroidNotification(**notification_options),
        )

    @staticmethod
    def _apns_config(
        title: str, body: str, platform_options: Mapping[str, Any] | None
    ) -> messaging.APNSConfig:
        aps_options: dict[str, Any] = {
            "alert": messaging.ApsAlert(title=title, body=body),
            "badge": 1,
            "sound": "default",
        }
        aps_options.update((platform_options or {}).get("apns") or {})
        return messaging.APNSConfig(payload=messaging.APNSPayload(aps=messaging.Aps(**aps_options)))


__all__ = ["FirebasePushChannel"]
