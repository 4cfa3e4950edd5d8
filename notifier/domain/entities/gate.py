"""Outcome of the preference and rate-limit gates."""

from __future__ import annotations

from enum import Enum


class GateDecision(str, Enum):
    """Three-way gate result.

    ``ALLOW_ON_ERROR`` lets delivery proceed after the gate itself failed, so
    callers and logs can tell it apart from a legitimate ``ALLOW``.
    """

    ALLOW = "allow"
    DENY = "deny"
    ALLOW_ON_ERROR = "allow_on_error"

    @property
    def allowed(self) -> bool:
        return self is not GateDecision.DENY


__all__ = ["GateDecision"]
