"""Tests for the verification, donation and audit log endpoints."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError

from app.infrastructure.repositories import NotificationRepository

from conftest import create_donation, create_user, login


def _admin_headers(client, session) -> dict[str, str]:
    create_user(session, email="admin@example.com", role="admin", name="Admin")
    return login(client, "admin@example.com")


def test_pending_users_listed_for_admins(client, session) -> None:
    headers = _admin_headers(client, session)
    create_user(session, user_id="u7", email="pending@example.com", verification_status="pending")

    response = client.get("/users/pending", headers=headers)

    assert response.status_code == 200
    assert [user["id"] for user in response.json()] == ["u7"]


def test_approval_clears_derived_feed_entry(client, session) -> None:
    headers = _admin_headers(client, session)
    create_user(session, user_id="u7", email="pending@example.com", verification_status="pending")

    response = client.post(
        "/users/u7/verification",
        json={"status": "approved", "reason": "Documents verified"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["verification_status"] == "approved"
    feed = client.get("/notifications/", headers=headers).json()
    assert "pending_user_u7" not in {entry["id"] for entry in feed["notifications"]}

    logs = client.get("/audit-logs/", params={"category": "verification"}, headers=headers)
    assert logs.status_code == 200
    assert [entry["target_id"] for entry in logs.json()] == ["u7"]

    user_headers = login(client, "pending@example.com")
    user_feed = client.get("/notifications/", headers=user_headers).json()
    assert [entry["title"] for entry in user_feed["notifications"]] == ["Account Approved"]


def test_verification_errors(client, session) -> None:
    headers = _admin_headers(client, session)
    create_user(session, user_id="u7", email="pending@example.com", verification_status="pending")

    invalid = client.post(
        "/users/u7/verification", json={"status": "maybe", "reason": "?"}, headers=headers
    )
    missing = client.post(
        "/users/nobody/verification",
        json={"status": "rejected", "reason": "No documents"},
        headers=headers,
    )

    assert invalid.status_code == 400
    assert missing.status_code == 404


def test_non_admin_routes_are_forbidden(client, session) -> None:
    create_user(session, email="vendor@example.com")
    headers = login(client, "vendor@example.com")

    assert client.get("/users/pending", headers=headers).status_code == 403
    assert client.get("/donations/", headers=headers).status_code == 403
    assert client.get("/audit-logs/", headers=headers).status_code == 403


def test_donation_status_update_flows_into_feed(client, session) -> None:
    headers = _admin_headers(client, session)
    create_donation(session, donation_id="d1", status="assigned", title="Bagels")

    response = client.post("/donations/d1/status", json={"status": "in-transit"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["status"] == "in-transit"

    feed = client.get("/notifications/", headers=headers).json()
    titles = {entry["id"]: entry["title"] for entry in feed["notifications"]}
    assert titles["donation_transit_d1"] == "Pickup Completed"
    assert "Pickup Completed" in {
        title for entry_id, title in titles.items() if entry_id != "donation_transit_d1"
    }


def test_donation_listing_filters_by_status(client, session) -> None:
    headers = _admin_headers(client, session)
    create_donation(session, donation_id="d1", status="available")
    create_donation(session, donation_id="d2", status="completed")

    response = client.get("/donations/", params={"status": "completed"}, headers=headers)

    assert response.status_code == 200
    assert [donation["id"] for donation in response.json()] == ["d2"]


def test_donation_status_update_errors(client, session) -> None:
    headers = _admin_headers(client, session)
    create_donation(session, donation_id="d1", status="available")

    assert (
        client.post("/donations/d1/status", json={"status": "lost"}, headers=headers).status_code
        == 400
    )
    assert (
        client.post(
            "/donations/missing/status", json={"status": "completed"}, headers=headers
        ).status_code
        == 404
    )


def test_donation_status_update_succeeds_when_notification_cannot_be_stored(
    client, session, monkeypatch
) -> None:
    headers = _admin_headers(client, session)
    create_donation(session, donation_id="d1", status="assigned")

    def _store_failure(*args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("store offline"))

    monkeypatch.setattr(NotificationRepository, "create", _store_failure)

    response = client.post("/donations/d1/status", json={"status": "in-transit"}, headers=headers)

    assert response.status_code == 200
    assert response.json()["status"] == "in-transit"
    listed = client.get("/donations/", params={"status": "in-transit"}, headers=headers)
    assert [donation["id"] for donation in listed.json()] == ["d1"]
