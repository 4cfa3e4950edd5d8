"""Tests for the per-type daily push quota."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

from notifier.application.use_cases.notifications import (
    check_limit,
    daily_cap_for,
    evaluate_rate_limit,
    record_send,
)
from notifier.config import reset_settings_cache
from notifier.domain.entities import GateDecision, NotificationType
from notifier.infrastructure.repositories import DailyNotificationTrackerRepository

DAY = date(2026, 3, 14)


def test_caps_per_type(monkeypatch):
    assert daily_cap_for(NotificationType.WELCOME) == 1
    assert daily_cap_for(NotificationType.JOB_ALERT) == 2
    assert daily_cap_for(NotificationType.PROFILE_VIEWED) == 5
    assert daily_cap_for(NotificationType.SYSTEM) == 10

    monkeypatch.setenv("DEFAULT_DAILY_CAP", "3")
    reset_settings_cache()

    assert daily_cap_for(NotificationType.SYSTEM) == 3
    assert daily_cap_for(NotificationType.TEST) == 10


def test_cap_blocks_after_limit_reached(session, make_user):
    user = make_user()

    assert check_limit(session, user.id, NotificationType.JOB_ALERT, day=DAY)
    assert record_send(session, user.id, NotificationType.JOB_ALERT, day=DAY) == 1
    assert check_limit(session, user.id, NotificationType.JOB_ALERT, day=DAY)
    assert record_send(session, user.id, NotificationType.JOB_ALERT, day=DAY) == 2

    decision = evaluate_rate_limit(session, user.id, NotificationType.JOB_ALERT, day=DAY)
    assert decision is GateDecision.DENY


def test_counters_are_scoped_by_type_and_day(session, make_user):
    user = make_user()
    record_send(session, user.id, NotificationType.WELCOME, day=DAY)

    assert not check_limit(session, user.id, NotificationType.WELCOME, day=DAY)
    assert check_limit(session, user.id, NotificationType.JOB_ALERT, day=DAY)
    assert check_limit(session, user.id, NotificationType.WELCOME, day=DAY + timedelta(days=1))


def test_concurrent_sends_are_all_counted(database, session, make_user):
    user = make_user()
    workers = 5

    def _send(_):
        db = database.session()
        try:
            return record_send(db, user.id, NotificationType.SYSTEM, day=DAY)
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(_send, range(workers)))

    assert sorted(results) == list(range(1, workers + 1))
    count = DailyNotificationTrackerRepository(session).get_count(
        user_id=user.id, notification_type=NotificationType.SYSTEM.value, day=DAY
    )
    assert count == workers


def test_record_failure_is_swallowed(session, make_user, monkeypatch, caplog):
    user = make_user()

    def _broken_increment(self, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(DailyNotificationTrackerRepository, "increment", _broken_increment)

    assert record_send(session, user.id, NotificationType.SYSTEM, day=DAY) is None
    assert "Failed to record" in caplog.text


def test_lookup_failure_fails_open(session, make_user, monkeypatch, caplog):
    user = make_user()

    def _broken_get_count(self, **kwargs):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(DailyNotificationTrackerRepository, "get_count", _broken_get_count)

    with caplog.at_level(logging.ERROR):
        decision = evaluate_rate_limit(session, user.id, NotificationType.SYSTEM, day=DAY)

    assert decision is GateDecision.ALLOW_ON_ERROR
    assert decision.allowed
    assert "Rate limit lookup failed" in caplog.text
