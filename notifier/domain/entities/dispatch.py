"""Outcomes returned by the notification dispatcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .notification import Notification

REASON_BLOCKED_BY_PREFERENCES = "blocked_by_preferences"
REASON_RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
REASON_NO_DEVICE_TOKEN = "no_device_token"
REASON_DELIVERY_FAILED = "delivery_failed"
REASON_UNKNOWN_USER = "unknown_user"


@dataclass(frozen=True)
class PushResult:
    """Provider acknowledgement of a single-recipient push."""

    message_id: str
    timestamp: datetime


@dataclass(frozen=True)
class PushTokenResult:
    """Outcome for one token of a multicast push."""

    device_token: str
    success: bool
    message_id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class MulticastResult:
    """Provider acknowledgement of a multi-recipient push."""

    success_count: int
    failure_count: int
    responses: list[PushTokenResult]
    timestamp: datetime


@dataclass
class DispatchResult:
    """Outcome of one dispatch to one user.

    The in-app ``notification`` is always present; ``reason`` explains why push
    delivery did not happen when ``success`` is false.
    """

    success: bool
    notification: Notification
    reason: str | None = None
    result: PushResult | None = None
    gates: dict[str, str] = field(default_factory=dict)


@dataclass
class RecipientOutcome:
    """Per-recipient entry of a bulk dispatch."""

    user_id: int
    success: bool
    reason: str | None = None
    notification_id: int | None = None
    error: str | None = None


@dataclass
class BulkDispatchResult:
    """Aggregate outcome of a dispatch to several users."""

    success_count: int = 0
    failure_count: int = 0
    outcomes: list[RecipientOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def add(self, outcome: RecipientOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.success:
            self.success_count += 1
        else:
            self.failure_count += 1

    def as_dict(self) -> dict[str, Any]:
        return {
            "totalUsers": self.total,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "results": [
                {
                    "userId": outcome.user_id,
                    "success": outcome.success,
                    "reason": outcome.reason,
                    "notificationId": outcome.notification_id,
                    "error": outcome.error,
                }
                for outcome in self.outcomes
            ],
        }


__all__ = [
    "BulkDispatchResult",
    "DispatchResult",
    "MulticastResult",
    "PushResult",
    "PushTokenResult",
    "REASON_BLOCKED_BY_PREFERENCES",
    "REASON_DELIVERY_FAILED",
    "REASON_NO_DEVICE_TOKEN",
    "REASON_RATE_LIMIT_EXCEEDED",
    "REASON_UNKNOWN_USER",
    "RecipientOutcome",
]
