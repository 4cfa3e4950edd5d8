"""FastAPI dependency utilities."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from notifier.domain.entities import ROLE_ADMIN, ROLE_BRANCH_ADMIN, ROLE_EMPLOYER
from notifier.infrastructure.push import DeliveryChannel
from notifier.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

DISPATCH_ROLES = frozenset({ROLE_ADMIN, ROLE_BRANCH_ADMIN, ROLE_EMPLOYER})


@dataclass(frozen=True)
class Principal:
    """Caller identity taken from the bearer token claims."""

    user_id: int
    role: str | None = None


def _credentials_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_principal(token: str) -> Principal:
    """Decode ``token`` and return the caller it identifies."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_error() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_error() from exc

    role = payload.get("role")
    return Principal(user_id=user_id, role=role.upper() if isinstance(role, str) else None)


def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    """Return the authenticated caller from the provided token."""

    return resolve_principal(token)


def require_dispatch_role(principal: Principal = Depends(get_current_principal)) -> Principal:
    """Ensure the caller may send notifications to other users."""

    if principal.role not in DISPATCH_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to send notifications",
        )
    return principal


def get_push_channel(request: Request) -> DeliveryChannel:
    """Return the push channel attached to the running application."""

    channel = getattr(request.app.state, "push_channel", None)
    if channel is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Push channel is not configured",
        )
    return channel


__all__ = [
    "DISPATCH_ROLES",
    "Principal",
    "get_current_principal",
    "get_push_channel",
    "require_dispatch_role",
    "resolve_principal",
]
