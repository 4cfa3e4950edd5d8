"""Tests for the in-app notification record use cases."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from notifier.application.use_cases.notifications import (
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from notifier.domain.entities import Notification
from notifier.domain.errors import NotificationForbiddenError, NotificationNotFoundError
from notifier.infrastructure.repositories import NotificationRepository

START = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


def _create(session, user_id, title, *, minutes=0, read=False):
    return NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=user_id,
            type="SYSTEM",
            title=title,
            message=f"{title} body",
            read=read,
            created_at=START + timedelta(minutes=minutes),
        )
    )


def test_listing_is_newest_first_with_unread_count(session, make_user):
    user = make_user()
    other = make_user()
    _create(session, user.id, "first", minutes=0)
    _create(session, user.id, "second", minutes=5, read=True)
    _create(session, user.id, "third", minutes=10)
    _create(session, other.id, "foreign", minutes=20)

    listing = list_notifications(session, user.id)

    assert [item.title for item in listing.notifications] == ["third", "second", "first"]
    assert listing.unread_count == 2


def test_listing_breaks_timestamp_ties_by_id(session, make_user):
    user = make_user()
    older = _create(session, user.id, "a")
    newer = _create(session, user.id, "b")

    listing = list_notifications(session, user.id)

    assert [item.id for item in listing.notifications] == [newer.id, older.id]


def test_mark_read_enforces_ownership(session, make_user):
    owner = make_user()
    intruder = make_user()
    notification = _create(session, owner.id, "private")

    with pytest.raises(NotificationForbiddenError):
        mark_notification_read(session, intruder.id, notification.id)
    assert NotificationRepository(session).get(notification.id).read is False
    with pytest.raises(NotificationNotFoundError):
        mark_notification_read(session, owner.id, notification.id + 100)

    mark_notification_read(session, owner.id, notification.id)
    assert NotificationRepository(session).get(notification.id).read is True


def test_mark_all_read_only_touches_caller(session, make_user):
    user = make_user()
    other = make_user()
    _create(session, user.id, "one")
    _create(session, user.id, "two")
    _create(session, user.id, "seen", read=True)
    _create(session, other.id, "theirs")

    assert mark_all_notifications_read(session, user.id) == 2
    assert list_notifications(session, user.id).unread_count == 0
    assert list_notifications(session, other.id).unread_count == 1
    assert mark_all_notifications_read(session, user.id) == 0


def test_delete_enforces_ownership(session, make_user):
    owner = make_user()
    intruder = make_user()
    notification = _create(session, owner.id, "keep")

    with pytest.raises(NotificationForbiddenError) as excinfo:
        delete_notification(session, intruder.id, notification.id)
    assert "delete" in str(excinfo.value)

    delete_notification(session, owner.id, notification.id)
    assert NotificationRepository(session).get(notification.id) is None
    with pytest.raises(NotificationNotFoundError):
        delete_notification(session, owner.id, notification.id)
