"""Integration tests for the notification REST endpoints."""

from __future__ import annotations

from notifier.domain.entities import ROLE_ADMIN, ROLE_CANDIDATE, NotificationType
from notifier.infrastructure.push import PushDeliveryError
from notifier.infrastructure.repositories import UserRepository


def test_requests_without_token_are_rejected(client):
    assert client.get("/notifications").status_code == 401

    response = client.get("/notifications", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_lifespan_opens_and_closes_channel(database, session, channel):
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app(database=database, channel=channel)):
        assert channel.opened
    assert channel.closed


def test_notification_lifecycle(client, dispatcher, make_user, auth_headers):
    user = make_user(name="Asha")
    other = make_user(name="Ravi")
    headers = auth_headers(user.id)
    first = dispatcher.dispatch(user.id, NotificationType.WELCOME, {"candidateName": "Asha"})
    second = dispatcher.dispatch(user.id, NotificationType.SYSTEM, {"message": "Maintenance"})
    foreign = dispatcher.dispatch(other.id, NotificationType.SYSTEM, {"message": "Hi"})

    response = client.get("/notifications", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["unreadCount"] == 2
    assert [item["id"] for item in body["notifications"]] == [
        second.notification.id,
        first.notification.id,
    ]
    assert body["notifications"][1]["data"] == {"candidateName": "Asha"}
    assert body["notifications"][1]["userId"] == user.id
    assert "createdAt" in body["notifications"][0]

    response = client.patch(f"/notifications/{foreign.notification.id}/read", headers=headers)
    assert response.status_code == 403

    response = client.patch("/notifications/999999/read", headers=headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Notification not found"

    response = client.patch(f"/notifications/{first.notification.id}/read", headers=headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Notification marked as read"
    assert client.get("/notifications", headers=headers).json()["unreadCount"] == 1

    response = client.patch("/notifications/read-all", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"updated": 1}

    response = client.delete(f"/notifications/{foreign.notification.id}", headers=headers)
    assert response.status_code == 403

    response = client.delete(f"/notifications/{second.notification.id}", headers=headers)
    assert response.status_code == 200
    remaining = client.get("/notifications", headers=headers).json()
    assert [item["id"] for item in remaining["notifications"]] == [first.notification.id]
    assert remaining["unreadCount"] == 0


def test_preferences_round_trip(client, make_user, auth_headers):
    user = make_user()
    headers = auth_headers(user.id)

    defaults = client.get("/notifications/preferences", headers=headers).json()
    assert defaults["pushNotifications"] is True
    assert defaults["smsNotifications"] is False

    response = client.put(
        "/notifications/preferences",
        json={"jobAlerts": False, "promotionalOffers": None},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["jobAlerts"] is False
    assert response.json()["data"]["promotionalOffers"] is True

    response = client.put(
        "/notifications/preferences", json={"smsNotifications": True}, headers=headers
    )
    updated = client.get("/notifications/preferences", headers=headers).json()
    assert updated["jobAlerts"] is False
    assert updated["smsNotifications"] is True

    response = client.put("/notifications/preferences", json={"unknown": True}, headers=headers)
    assert response.status_code == 422


def test_device_token_registration_enables_test_push(
    client, session, channel, make_user, auth_headers
):
    user = make_user(device_token=None)
    headers = auth_headers(user.id)

    response = client.post("/notifications/push/test", headers=headers)
    assert response.status_code == 404

    response = client.put(
        "/notifications/device-token",
        json={"deviceToken": "fcm-token-registered-0001"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Device token registered"

    response = client.post("/notifications/push/test", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["data"]["success"] is True
    assert body["data"]["messageId"] == "projects/test/messages/1"
    assert channel.sent[-1]["token"] == "fcm-token-registered-0001"
    assert channel.sent[-1]["title"] == "Test notification"

    channel.error = PushDeliveryError("Requested entity was not found.", code="not-found")
    response = client.post("/notifications/push/test", headers=headers)
    assert response.status_code == 502

    response = client.put("/notifications/device-token", json={"deviceToken": ""}, headers=headers)
    assert response.json()["message"] == "Device token removed"
    session.expire_all()
    assert UserRepository(session).get_device_token(user.id) is None


def test_dispatch_requires_privileged_role(client, make_user, auth_headers):
    user = make_user()
    payload = {"userIds": [user.id], "type": "SYSTEM", "variables": {"message": "Hi"}}

    response = client.post(
        "/notifications/dispatch", json=payload, headers=auth_headers(user.id, ROLE_CANDIDATE)
    )

    assert response.status_code == 403


def test_dispatch_to_many_users(client, channel, make_user, auth_headers):
    admin = make_user(name="Admin", role=ROLE_ADMIN)
    first = make_user()
    second = make_user(device_token=None)
    payload = {
        "userIds": [first.id, second.id, first.id],
        "type": "system",
        "variables": {"message": "Scheduled maintenance tonight"},
    }

    response = client.post(
        "/notifications/dispatch", json=payload, headers=auth_headers(admin.id, ROLE_ADMIN)
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalUsers"] == 2
    assert data["successCount"] == 1
    assert data["failureCount"] == 1
    assert data["results"][1] == {
        "userId": second.id,
        "success": False,
        "reason": "no_device_token",
        "notificationId": data["results"][1]["notificationId"],
        "error": None,
    }
    assert channel.sent[0]["body"] == "Scheduled maintenance tonight"


def test_dispatch_multicast_mode(client, channel, make_user, auth_headers):
    admin = make_user(name="Admin", role=ROLE_ADMIN)
    users = [make_user(), make_user()]
    payload = {
        "userIds": [user.id for user in users],
        "type": "PROMOTIONAL",
        "variables": {"headline": "Festive hiring", "message": "New jobs near you"},
        "mode": "multicast",
    }

    response = client.post(
        "/notifications/dispatch", json=payload, headers=auth_headers(admin.id, ROLE_ADMIN)
    )

    assert response.status_code == 200
    assert response.json()["data"]["successCount"] == 2
    assert len(channel.multicasts) == 1


def test_dispatch_multicast_mode_reports_unknown_users(client, channel, make_user, auth_headers):
    admin = make_user(name="Admin", role=ROLE_ADMIN)
    user = make_user()
    payload = {
        "userIds": [user.id, 9999],
        "type": "SYSTEM",
        "variables": {"message": "Scheduled maintenance tonight"},
        "mode": "multicast",
    }

    response = client.post(
        "/notifications/dispatch", json=payload, headers=auth_headers(admin.id, ROLE_ADMIN)
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["successCount"] == 1
    assert data["failureCount"] == 1
    assert {result["userId"]: result["reason"] for result in data["results"]} == {
        user.id: None,
        9999: "unknown_user",
    }
    assert channel.multicasts[0]["tokens"] == [user.device_token]


def test_dispatch_unknown_type_is_a_bad_request(client, make_user, auth_headers):
    admin = make_user(name="Admin", role=ROLE_ADMIN)

    response = client.post(
        "/notifications/dispatch",
        json={"userIds": [admin.id], "type": "MYSTERY"},
        headers=auth_headers(admin.id, ROLE_ADMIN),
    )

    assert response.status_code == 400
    assert "MYSTERY" in response.json()["detail"]
