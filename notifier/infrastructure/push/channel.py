"""Contract of the external push delivery channel."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable

from notifier.domain.entities import MulticastResult, PushResult


class PushDeliveryError(Exception):
    """The push provider rejected or failed to deliver a message."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        self.code = code
        self.message = message
        # Set by the dispatcher to the in-app record persisted before the send.
        self.notification = None
        super().__init__(f"{code}: {message}" if code else message)


class PushConfigurationError(PushDeliveryError):
    """The push channel cannot be used with the current configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="configuration-error")


@runtime_checkable
class DeliveryChannel(Protocol):
    """Push provider addressed by per-user device tokens."""

    def open(self) -> None: ...

    def close(self) -> None: ...

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: Mapping[str, str],
        platform_options: Mapping[str, Any] | None = None,
    ) -> PushResult: ...

    def send_multicast(
        self,
        device_tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, str],
        platform_options: Mapping[str, Any] | None = None,
    ) -> MulticastResult: ...


def to_display_string(value: Any) -> str:
    """Return the string form used in rendered text and push payloads."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def stringify_data(data: Mapping[str, Any] | None) -> dict[str, str]:
    """Coerce every payload value to a string, as push providers require."""

    return {str(key): to_display_string(value) for key, value in (data or {}).items()}


def mask_token(device_token: str | None) -> str:
    """Return a log-safe prefix of ``device_token``."""

    if not device_token:
        return "null"
    return f"{device_token[:20]}..."


__all__ = [
    "DeliveryChannel",
    "PushConfigurationError",
    "PushDeliveryError",
    "mask_token",
    "stringify_data",
    "to_display_string",
]
