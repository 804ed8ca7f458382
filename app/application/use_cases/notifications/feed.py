"""Build notification feeds and apply read-state changes.

A feed merges the notifications stored for the viewer (and, for administrators,
for the shared administrative channel) with entries derived on the fly from
pending verifications and donation lifecycle state. Derived entries carry
reserved ids and have no stored state, so marking them as read is a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import (
    Notification,
    PersistedNotificationId,
    SyntheticNotificationId,
    Viewer,
    parse_notification_id,
)
from app.domain.exceptions import FeedUnavailable, InvalidRequest, Unauthenticated
from app.infrastructure.repositories import (
    DonationRepository,
    NotificationRepository,
    UserRepository,
)
from app.utils import ensure_app_timezone, now_in_app_timezone

from .synthetic import (
    SYNTHETIC_DONATION_STATUSES,
    donation_entries,
    pending_user_entries,
)

logger = logging.getLogger(__name__)


def feed_channels(viewer: Viewer, settings: Settings | None = None) -> list[str]:
    """Return the recipient ids whose notifications ``viewer`` may read."""

    settings = settings or get_settings()
    channels = [viewer.id]
    if settings.is_admin_role(viewer.role) and settings.admin_channel_id not in channels:
        channels.append(settings.admin_channel_id)
    return channels


def build_feed(
    session: Session,
    viewer: Viewer | None,
    *,
    now: datetime | None = None,
    settings: Settings | None = None,
) -> list[Notification]:
    """Return the merged feed for ``viewer`` sorted newest first.

    Raises :class:`Unauthenticated` before touching the store when there is no
    viewer, and :class:`FeedUnavailable` when stored notifications cannot be
    read.
    """

    viewer = _require_viewer(viewer)
    settings = settings or get_settings()
    now = ensure_app_timezone(now) if now is not None else now_in_app_timezone()

    try:
        persisted = NotificationRepository(session).list_for_recipients(
            feed_channels(viewer, settings), limit=settings.feed_fetch_limit
        )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to load notifications for viewer %s", viewer.id)
        raise FeedUnavailable() from exc

    synthetic: list[Notification] = []
    if settings.is_admin_role(viewer.role):
        synthetic = _derive_entries(session, settings=settings, now=now)

    feed = merge_feed(persisted, synthetic, now=now)
    logger.debug(
        "Built feed for viewer %s: %s stored, %s derived, %s total",
        viewer.id,
        len(persisted),
        len(synthetic),
        len(feed),
    )
    return feed


def merge_feed(
    persisted: Iterable[Notification],
    synthetic: Iterable[Notification],
    *,
    now: datetime,
) -> list[Notification]:
    """Concatenate, drop repeated ids and sort by creation time descending.

    The first occurrence of an id wins, so stored notifications take precedence.
    Ties keep their insertion order.
    """

    seen: set[str] = set()
    merged: list[Notification] = []
    for entry in (*persisted, *synthetic):
        if entry.id is None or entry.id in seen:
            continue
        seen.add(entry.id)
        merged.append(entry)
    return sorted(
        merged,
        key=lambda entry: ensure_app_timezone(entry.created_at) or now,
        reverse=True,
    )


def mark_read(session: Session, viewer: Viewer | None, ids: Iterable[object]) -> int:
    """Mark the stored notifications among ``ids`` as read.

    Derived ids are accepted and ignored. Returns how many stored notifications
    moved from unread to read; repeated calls are harmless and return ``0``.
    """

    viewer = _require_viewer(viewer)
    settings = get_settings()
    persisted_ids, synthetic_ids = partition_ids(
        _validate_ids(ids, max_ids=settings.mark_read_max_ids)
    )
    if synthetic_ids:
        logger.debug(
            "Ignoring %s derived notification id(s) for viewer %s",
            len(synthetic_ids),
            viewer.id,
        )
    if not persisted_ids:
        return 0

    try:
        return NotificationRepository(session).mark_as_read(
            [str(notification_id) for notification_id in persisted_ids],
            recipient_ids=feed_channels(viewer, settings),
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to mark notifications as read for viewer %s", viewer.id)
        raise FeedUnavailable("Notifications could not be marked as read") from exc


def partition_ids(
    ids: Iterable[str],
) -> tuple[list[PersistedNotificationId], list[SyntheticNotificationId]]:
    """Split raw ids into stored and derived identifiers."""

    persisted: list[PersistedNotificationId] = []
    synthetic: list[SyntheticNotificationId] = []
    for raw in ids:
        notification_id = parse_notification_id(raw)
        if isinstance(notification_id, SyntheticNotificationId):
            synthetic.append(notification_id)
        else:
            persisted.append(notification_id)
    return persisted, synthetic


def _derive_entries(
    session: Session, *, settings: Settings, now: datetime
) -> list[Notification]:
    try:
        pending_users = UserRepository(session).list_pending_verification()
        repository = DonationRepository(session)
        donations = [
            *repository.list(
                statuses=SYNTHETIC_DONATION_STATUSES, limit=settings.donation_scan_limit
            ),
            *repository.list_expiring(
                now=now,
                window_hours=settings.expiry_window_hours,
                limit=settings.donation_scan_limit,
            ),
        ]
    except (SQLAlchemyError, ValueError):
        session.rollback()
        logger.warning(
            "Failed to derive feed entries; serving stored notifications only",
            exc_info=True,
        )
        return []

    channel_id = settings.admin_channel_id
    return [
        *pending_user_entries(pending_users, channel_id=channel_id, now=now),
        *donation_entries(
            donations,
            channel_id=channel_id,
            now=now,
            window_hours=settings.expiry_window_hours,
        ),
    ]


def _require_viewer(viewer: Viewer | None) -> Viewer:
    if viewer is None or not viewer.id:
        raise Unauthenticated()
    return viewer


def _validate_ids(ids: Iterable[object], *, max_ids: int) -> Sequence[str]:
    if ids is None or isinstance(ids, (str, bytes)):
        raise InvalidRequest("Notification ids must be a list of strings")
    try:
        candidates = list(ids)
    except TypeError as exc:
        raise InvalidRequest("Notification ids must be a list of strings") from exc

    if len(candidates) > max_ids:
        raise InvalidRequest(f"At most {max_ids} notification ids can be marked at once")

    seen: set[str] = set()
    unique: list[str] = []
    for candidate in candidates:
        if not isinstance(candidate, str) or not candidate.strip():
            raise InvalidRequest("Notification ids must be non-empty strings")
        if candidate not in seen:
            seen.add(candidate)
            unique.append(candidate)
    return unique


__all__ = [
    "build_feed",
    "feed_channels",
    "mark_read",
    "merge_feed",
    "partition_ids",
]
