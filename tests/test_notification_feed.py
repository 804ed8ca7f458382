"""Tests for building notification feeds and marking entries as read."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.application.use_cases.notifications import (
    build_feed,
    feed_channels,
    mark_read,
    merge_feed,
    partition_ids,
)
from app.config import get_settings
from app.domain.entities import (
    Notification,
    PersistedNotificationId,
    SyntheticKind,
    SyntheticNotificationId,
    Viewer,
)
from app.domain.exceptions import FeedUnavailable, InvalidRequest, Unauthenticated
from app.infrastructure.repositories import (
    DonationRepository,
    NotificationRepository,
    UserRepository,
)

from conftest import NOW, create_donation, create_user, store_notification

ADMIN = Viewer(id="admin-1", role="admin")
VENDOR = Viewer(id="vendor-1", role="vendor")


def _store_failure(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("store offline"))


def _entry(notification_id, created_at):
    return Notification(
        id=notification_id,
        recipient_id="admin",
        sender_id="system",
        type="new_report",
        title="t",
        message="m",
        created_at=created_at,
    )


def test_channels_include_admin_channel_only_for_admin_roles():
    assert feed_channels(VENDOR) == ["vendor-1"]
    assert feed_channels(ADMIN) == ["admin-1", "admin"]
    assert feed_channels(Viewer(id="root", role="SuperAdmin")) == ["root", "admin"]


def test_non_admin_feed_contains_only_own_notifications(session):
    store_notification(session, notification_id="n1", recipient_id="vendor-1", created_at=NOW)
    store_notification(session, notification_id="n2", recipient_id="admin", created_at=NOW)
    store_notification(session, notification_id="n3", recipient_id="vendor-2", created_at=NOW)
    create_user(session, user_id="u7", email="pending@example.com", verification_status="pending")

    feed = build_feed(session, VENDOR, now=NOW)

    assert [entry.id for entry in feed] == ["n1"]


def test_admin_feed_merges_personal_channel_and_derived_entries(session):
    store_notification(
        session, notification_id="n1", recipient_id="admin-1", created_at=NOW - timedelta(hours=1)
    )
    store_notification(
        session, notification_id="n2", recipient_id="admin", created_at=NOW - timedelta(hours=4)
    )
    create_user(
        session,
        user_id="u7",
        email="pending@example.com",
        name="Hope Foundation",
        verification_status="pending",
        created_at=NOW - timedelta(hours=2),
    )
    create_user(session, user_id="u8", email="approved@example.com")
    create_donation(
        session,
        donation_id="d1",
        status="completed",
        updated_at=NOW - timedelta(hours=3),
    )
    create_donation(
        session,
        donation_id="d2",
        status="available",
        expiry_time=NOW + timedelta(hours=5),
    )
    create_donation(
        session,
        donation_id="d3",
        status="available",
        expiry_time=NOW + timedelta(hours=30),
    )

    feed = build_feed(session, ADMIN, now=NOW)

    assert [entry.id for entry in feed] == [
        "donation_expiring_d2",
        "n1",
        "pending_user_u7",
        "donation_completed_d1",
        "n2",
    ]
    derived = [entry for entry in feed if entry.is_synthetic]
    assert all(not entry.is_read for entry in derived)
    assert feed[2].message == "Hope Foundation has registered and is waiting for approval"


def test_feed_is_sorted_newest_first_with_stable_ties(session):
    store_notification(session, notification_id="b", recipient_id="vendor-1", created_at=NOW)
    store_notification(session, notification_id="a", recipient_id="vendor-1", created_at=NOW)
    store_notification(
        session, notification_id="c", recipient_id="vendor-1", created_at=NOW + timedelta(minutes=1)
    )

    feed = build_feed(session, VENDOR, now=NOW)

    assert [entry.id for entry in feed] == ["c", "b", "a"]


def test_merge_keeps_first_occurrence_of_repeated_ids():
    stored = _entry("pending_user_u7", NOW - timedelta(days=1))
    derived = _entry("pending_user_u7", NOW)
    other = _entry("n1", NOW - timedelta(hours=1))

    merged = merge_feed([stored, other], [derived], now=NOW)

    assert [entry.id for entry in merged] == ["n1", "pending_user_u7"]
    assert merged[1] is stored


def test_merge_preserves_order_of_equal_timestamps():
    entries = [_entry(str(index), NOW) for index in range(5)]

    merged = merge_feed(entries[:3], entries[3:], now=NOW)

    assert [entry.id for entry in merged] == ["0", "1", "2", "3", "4"]


def test_feed_respects_fetch_limit(session):
    limit = get_settings().feed_fetch_limit
    for index in range(limit + 5):
        store_notification(
            session,
            recipient_id="vendor-1",
            created_at=NOW - timedelta(minutes=index),
        )

    feed = build_feed(session, VENDOR, now=NOW)

    assert len(feed) == limit
    assert feed[0].created_at == NOW


def test_build_feed_requires_viewer_before_touching_store():
    with pytest.raises(Unauthenticated):
        build_feed(None, None)
    with pytest.raises(Unauthenticated):
        build_feed(None, Viewer(id="", role="admin"))


def test_build_feed_reports_store_failure(session, monkeypatch):
    monkeypatch.setattr(NotificationRepository, "list_for_recipients", _store_failure)

    with pytest.raises(FeedUnavailable):
        build_feed(session, ADMIN, now=NOW)


def test_derivation_failure_serves_stored_notifications(session, monkeypatch):
    store_notification(session, notification_id="n1", recipient_id="admin", created_at=NOW)
    monkeypatch.setattr(DonationRepository, "list", _store_failure)

    feed = build_feed(session, ADMIN, now=NOW)

    assert [entry.id for entry in feed] == ["n1"]


def test_partition_ids_splits_stored_and_derived():
    persisted, synthetic = partition_ids(["n1", "pending_user_u7", "donation_expiring_d2"])

    assert persisted == [PersistedNotificationId("n1")]
    assert synthetic == [
        SyntheticNotificationId(SyntheticKind.PENDING_USER, "u7"),
        SyntheticNotificationId(SyntheticKind.DONATION_EXPIRING, "d2"),
    ]


def test_mark_read_updates_stored_and_ignores_derived(session):
    store_notification(session, notification_id="n1", recipient_id="admin", created_at=NOW)
    create_user(session, user_id="u7", email="pending@example.com", verification_status="pending")

    before = build_feed(session, ADMIN, now=NOW)
    assert {entry.id for entry in before} == {"n1", "pending_user_u7"}

    marked = mark_read(session, ADMIN, ["n1", "pending_user_u7"])
    session.expire_all()
    after = {entry.id: entry for entry in build_feed(session, ADMIN, now=NOW)}

    assert marked == 1
    assert after["n1"].is_read is True
    assert after["n1"].read_at is not None
    assert after["pending_user_u7"].is_read is False


def test_mark_read_with_only_derived_ids_skips_store(session, monkeypatch):
    monkeypatch.setattr(NotificationRepository, "mark_as_read", _store_failure)

    assert mark_read(session, ADMIN, ["pending_user_u7", "donation_completed_d1"]) == 0


def test_mark_read_is_idempotent(session):
    store_notification(session, notification_id="n1", recipient_id="vendor-1", created_at=NOW)

    assert mark_read(session, VENDOR, ["n1", "n1"]) == 1
    assert mark_read(session, VENDOR, ["n1"]) == 0


def test_mark_read_ignores_unknown_and_foreign_ids(session):
    store_notification(session, notification_id="n1", recipient_id="vendor-2", created_at=NOW)
    store_notification(session, notification_id="n2", recipient_id="admin", created_at=NOW)

    assert mark_read(session, VENDOR, ["n1", "n2", "missing"]) == 0
    assert NotificationRepository(session).get("n1").is_read is False


@pytest.mark.parametrize("ids", [None, "n1", b"n1", 42, ["n1", ""], ["n1", None], [7]])
def test_mark_read_rejects_malformed_ids(session, ids):
    with pytest.raises(InvalidRequest):
        mark_read(session, VENDOR, ids)


def test_mark_read_requires_viewer():
    with pytest.raises(Unauthenticated):
        mark_read(None, None, ["n1"])


def test_mark_read_reports_write_failure(session, monkeypatch):
    monkeypatch.setattr(NotificationRepository, "mark_as_read", _store_failure)

    with pytest.raises(FeedUnavailable):
        mark_read(session, VENDOR, ["n1"])


def test_expiring_donation_is_not_crowded_out_by_recent_lifecycle_changes(session):
    limit = get_settings().donation_scan_limit
    create_donation(
        session,
        donation_id="fresh-soup",
        status="available",
        created_at=NOW - timedelta(days=2),
        expiry_time=NOW + timedelta(hours=5),
    )
    for index in range(limit + 5):
        create_donation(
            session,
            donation_id=f"done-{index}",
            status="completed",
            updated_at=NOW - timedelta(minutes=index + 1),
        )

    feed = build_feed(session, ADMIN, now=NOW)
    ids = [entry.id for entry in feed]

    assert ids.count("donation_expiring_fresh-soup") == 1
    assert sum(1 for entry_id in ids if entry_id.startswith("donation_completed_")) == limit


def test_expiring_query_honours_window_bounds(session):
    create_donation(session, donation_id="past", status="available", expiry_time=NOW)
    create_donation(
        session, donation_id="edge", status="available", expiry_time=NOW + timedelta(hours=24)
    )
    create_donation(
        session,
        donation_id="later",
        status="available",
        expiry_time=NOW + timedelta(hours=24, seconds=1),
    )
    create_donation(
        session, donation_id="taken", status="assigned", expiry_time=NOW + timedelta(hours=1)
    )

    expiring = DonationRepository(session).list_expiring(now=NOW, window_hours=24)

    assert [donation.id for donation in expiring] == ["edge"]


def test_unreadable_user_rows_serve_stored_notifications(session, monkeypatch):
    store_notification(session, notification_id="n1", recipient_id="admin", created_at=NOW)

    def _missing_role(*args, **kwargs):
        raise ValueError("User role is not set")

    monkeypatch.setattr(UserRepository, "list_pending_verification", _missing_role)

    feed = build_feed(session, ADMIN, now=NOW)

    assert [entry.id for entry in feed] == ["n1"]


def test_mark_read_rejects_oversized_batches(session, monkeypatch):
    limit = get_settings().mark_read_max_ids
    monkeypatch.setattr(NotificationRepository, "mark_as_read", _store_failure)

    with pytest.raises(InvalidRequest):
        mark_read(session, VENDOR, [f"n{index}" for index in range(limit + 1)])


def test_mark_read_counts_each_id_once_in_large_batches(session):
    store_notification(session, notification_id="n1", recipient_id="vendor-1", created_at=NOW)
    limit = get_settings().mark_read_max_ids

    assert mark_read(session, VENDOR, ["n1"] * limit) == 1
