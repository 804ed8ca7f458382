"""End-to-end tests for the notification feed endpoints."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.exc import OperationalError

from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from conftest import create_donation, create_user, login, store_notification


def _store_failure(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("store offline"))


def _admin_headers(client, session) -> dict[str, str]:
    create_user(session, email="admin@example.com", role="admin", name="Admin")
    return login(client, "admin@example.com")


def test_admin_feed_then_mark_read(client, session) -> None:
    headers = _admin_headers(client, session)
    now = now_in_app_timezone()
    store_notification(
        session, notification_id="n1", recipient_id="admin", created_at=now - timedelta(minutes=5)
    )
    create_user(
        session,
        user_id="u7",
        email="pending@example.com",
        name="Hope Foundation",
        verification_status="pending",
        created_at=now - timedelta(hours=1),
    )

    feed = client.get("/notifications/", headers=headers)

    assert feed.status_code == 200
    body = feed.json()
    assert [entry["id"] for entry in body["notifications"]] == ["n1", "pending_user_u7"]
    assert body["unread_count"] == 2
    assert body["notifications"][1]["is_synthetic"] is True

    marked = client.post(
        "/notifications/mark-read",
        json={"ids": ["n1", "pending_user_u7"]},
        headers=headers,
    )

    assert marked.status_code == 200
    assert marked.json() == {"marked": 1}

    body = client.get("/notifications/", headers=headers).json()
    read_state = {entry["id"]: entry["is_read"] for entry in body["notifications"]}
    assert read_state == {"n1": True, "pending_user_u7": False}
    assert body["unread_count"] == 1


def test_vendor_feed_excludes_admin_channel_and_derived_entries(client, session) -> None:
    vendor_id = create_user(session, email="vendor@example.com")
    headers = login(client, "vendor@example.com")
    now = now_in_app_timezone()
    store_notification(session, notification_id="mine", recipient_id=vendor_id, created_at=now)
    store_notification(session, notification_id="admins", recipient_id="admin", created_at=now)
    create_user(session, email="pending@example.com", verification_status="pending")
    create_donation(session, status="completed")

    body = client.get("/notifications/", headers=headers).json()

    assert [entry["id"] for entry in body["notifications"]] == ["mine"]


def test_feed_store_failure_returns_empty_feed(client, session, monkeypatch) -> None:
    headers = _admin_headers(client, session)
    monkeypatch.setattr(NotificationRepository, "list_for_recipients", _store_failure)

    response = client.get("/notifications/", headers=headers)

    assert response.status_code == 503
    body = response.json()
    assert body["notifications"] == []
    assert body["unread_count"] == 0


def test_mark_read_failure_is_reported(client, session, monkeypatch) -> None:
    headers = _admin_headers(client, session)
    monkeypatch.setattr(NotificationRepository, "mark_as_read", _store_failure)

    response = client.post("/notifications/mark-read", json={"ids": ["n1"]}, headers=headers)

    assert response.status_code == 503


def test_mark_read_rejects_blank_ids(client, session) -> None:
    headers = _admin_headers(client, session)

    response = client.post("/notifications/mark-read", json={"ids": ["  "]}, headers=headers)

    assert response.status_code == 400


def test_mark_read_rejects_non_string_ids(client, session) -> None:
    headers = _admin_headers(client, session)

    response = client.post("/notifications/mark-read", json={"ids": [1, 2]}, headers=headers)

    assert response.status_code == 422


def test_admin_can_store_notification(client, session) -> None:
    headers = _admin_headers(client, session)

    response = client.post(
        "/notifications/",
        json={
            "recipient_id": "admin",
            "type": "new_report",
            "title": "New report",
            "message": "A recipient filed a report",
        },
        headers=headers,
    )

    assert response.status_code == 201
    created = response.json()
    assert created["is_read"] is False
    assert created["is_synthetic"] is False

    feed = client.get("/notifications/", headers=headers).json()
    assert created["id"] in {entry["id"] for entry in feed["notifications"]}


def test_vendor_cannot_store_notification(client, session) -> None:
    create_user(session, email="vendor@example.com")
    headers = login(client, "vendor@example.com")

    response = client.post(
        "/notifications/",
        json={"recipient_id": "admin", "type": "x", "title": "t", "message": "m"},
        headers=headers,
    )

    assert response.status_code == 403


def test_check_expiring_stores_warnings(client, session) -> None:
    headers = _admin_headers(client, session)
    now = now_in_app_timezone()
    create_donation(session, donation_id="d1", status="available", expiry_time=now + timedelta(hours=3))
    create_donation(session, donation_id="d2", status="available", expiry_time=now + timedelta(days=3))

    response = client.post("/notifications/check-expiring", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"count": 1}
