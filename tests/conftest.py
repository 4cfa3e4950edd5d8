"""Shared fixtures: a temporary SQLite database and a recording push channel."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from itertools import count
from typing import Any

import pytest
from fastapi.testclient import TestClient

from notifier.application.use_cases.notifications import (
    NotificationDispatcher,
    seed_default_templates,
)
from notifier.config import get_settings, reset_settings_cache
from notifier.domain.entities import (
    ROLE_CANDIDATE,
    MulticastResult,
    PushResult,
    PushTokenResult,
)
from notifier.infrastructure.database import Database
from notifier.infrastructure.push import PushDeliveryError
from notifier.infrastructure.repositories import UserRepository
from notifier.infrastructure.security import create_access_token
from notifier.utils import now_in_app_timezone, reset_app_timezone_cache


class RecordingChannel:
    """In-memory push channel that remembers what it was asked to send."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.multicasts: list[dict[str, Any]] = []
        self.failing_tokens: set[str] = set()
        self.error: Exception | None = None
        self.opened = False
        self.closed = False

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.closed = True

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: Mapping[str, str],
        platform_options: Mapping[str, Any] | None = None,
    ) -> PushResult:
        if self.error is not None:
            raise self.error
        if device_token in self.failing_tokens:
            raise PushDeliveryError("Requested entity was not found.", code="not-found")
        self.sent.append(
            {
                "token": device_token,
                "title": title,
                "body": body,
                "data": dict(data),
                "options": platform_options,
            }
        )
        return PushResult(
            message_id=f"projects/test/messages/{len(self.sent)}",
            timestamp=now_in_app_timezone(),
        )

    def send_multicast(
        self,
        device_tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, str],
        platform_options: Mapping[str, Any] | None = None,
    ) -> MulticastResult:
        if self.error is not None:
            raise self.error
        self.multicasts.append(
            {"tokens": list(device_tokens), "title": title, "body": body, "data": dict(data)}
        )
        responses = [
            PushTokenResult(
                device_token=token,
                success=token not in self.failing_tokens,
                message_id=None if token in self.failing_tokens else f"multicast-{index}",
                error="Requested entity was not found." if token in self.failing_tokens else None,
            )
            for index, token in enumerate(device_tokens)
        ]
        succeeded = sum(1 for response in responses if response.success)
        return MulticastResult(
            success_count=succeeded,
            failure_count=len(responses) - succeeded,
            responses=responses,
            timestamp=now_in_app_timezone(),
        )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings in UTC."""

    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_KEY", raising=False)
    reset_settings_cache()
    reset_app_timezone_cache()
    yield
    reset_settings_cache()
    reset_app_timezone_cache()


@pytest.fixture()
def database(tmp_path):
    handle = Database(f"sqlite:///{tmp_path / 'notifier.db'}")
    handle.open()
    handle.create_all()
    yield handle
    handle.close()


@pytest.fixture()
def session(database):
    db = database.session()
    seed_default_templates(db)
    yield db
    db.close()


@pytest.fixture()
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture()
def dispatcher(session, channel) -> NotificationDispatcher:
    return NotificationDispatcher(session, channel)


@pytest.fixture()
def make_user(session):
    """Return a factory creating users with a unique device token by default."""

    sequence = count(1)

    def _make_user(name: str = "Asha", role: str = ROLE_CANDIDATE, **kwargs):
        number = next(sequence)
        kwargs.setdefault("email", f"user{number}@example.com")
        kwargs.setdefault("device_token", f"fcm-device-token-{number:04d}")
        return UserRepository(session).create(name=name, role=role, **kwargs)

    return _make_user


@pytest.fixture()
def client(database, session, channel):
    """Return a test client bound to the temporary database and recording channel."""

    from main import create_app

    app = create_app(settings=get_settings(), database=database, channel=channel)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    """Return a helper building bearer headers for a user id and role."""

    def _auth_headers(user_id: int, role: str = ROLE_CANDIDATE) -> dict[str, str]:
        token = create_access_token({"sub": str(user_id), "role": role})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
