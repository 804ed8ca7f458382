"""Shared fixtures: a throwaway sqlite database and entity factories."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "foodshare_admin_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import Donation, Notification  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.models import RoleModel, UserModel  # noqa: E402
from app.infrastructure.repositories import (  # noqa: E402
    DonationRepository,
    NotificationRepository,
)
from app.infrastructure.security import get_password_hash  # noqa: E402

DEFAULT_PASSWORD = "StrongPass123"
NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

_PASSWORD_HASH = get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def create_user(
    session,
    *,
    user_id: str | None = None,
    email: str,
    role: str = "vendor",
    name: str | None = "Test User",
    verification_status: str = "approved",
    is_active: bool = True,
    created_at: datetime | None = None,
) -> str:
    """Insert a user row directly and return its id."""

    role_model = session.query(RoleModel).filter_by(alias=role).first()
    if role_model is None:
        role_model = RoleModel(name=role.title(), alias=role)
        session.add(role_model)
        session.commit()
        session.refresh(role_model)

    user = UserModel(
        role_id=role_model.id,
        name=name,
        email=email,
        password=_PASSWORD_HASH,
        verification_status=verification_status,
        is_active=is_active,
    )
    if user_id is not None:
        user.id = user_id
    if created_at is not None:
        user.created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user.id


def create_donation(
    session,
    *,
    donation_id: str | None = None,
    status: str,
    title: str | None = "Fresh Bread",
    vendor_name: str | None = "Corner Bakery",
    expiry_time: datetime | None = None,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
) -> Donation:
    return DonationRepository(session).create(
        Donation(
            id=donation_id,
            vendor_id=None,
            vendor_name=vendor_name,
            title=title,
            status=status,
            expiry_time=expiry_time,
            created_at=created_at or NOW - timedelta(days=1),
            updated_at=updated_at,
        )
    )


def store_notification(
    session,
    *,
    notification_id: str | None = None,
    recipient_id: str,
    created_at: datetime,
    title: str = "Hello",
    is_read: bool = False,
) -> Notification:
    return NotificationRepository(session).create(
        Notification(
            id=notification_id,
            recipient_id=recipient_id,
            sender_id="system",
            type="new_report",
            title=title,
            message=f"{title} message",
            is_read=is_read,
            created_at=created_at,
        )
    )


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
    """Return authorization headers for ``email``."""

    response = client.post(
        "/auth/token",
        data={"username": email, "password": password},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
