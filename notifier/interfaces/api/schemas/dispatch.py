"""Pydantic models for the dispatch endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from .base import CamelModel


class DispatchRequest(CamelModel):
    """Template notification addressed to one or many users.

    ``individual`` dispatches to each user in turn; ``multicast`` renders the
    message once and hands every eligible token to the channel in one call.
    """

    user_ids: list[int] = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    variables: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] | None = None
    mode: Literal["individual", "multicast"] = "individual"


class RecipientOutcomeRead(CamelModel):
    user_id: int
    success: bool
    reason: str | None = None
    notification_id: int | None = None
    error: str | None = None


class BulkDispatchRead(CamelModel):
    total_users: int
    success_count: int
    failure_count: int
    results: list[RecipientOutcomeRead]


class DispatchResponse(BaseModel):
    message: str
    data: BulkDispatchRead


class PushDeliveryRead(CamelModel):
    success: bool
    notification_id: int | None = None
    message_id: str | None = None
    reason: str | None = None
    gates: dict[str, str] = Field(default_factory=dict)


class PushDeliveryResponse(BaseModel):
    message: str
    data: PushDeliveryRead


__all__ = [
    "BulkDispatchRead",
    "DispatchRequest",
    "DispatchResponse",
    "PushDeliveryRead",
    "PushDeliveryResponse",
    "RecipientOutcomeRead",
]
