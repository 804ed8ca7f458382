"""Derive feed entries from the current state of users and donations.

These entries are never stored. They are rebuilt on every feed request, are
always unread, and disappear once the condition that produced them clears.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime

from app.domain.entities import (
    DONATION_STATUS_AVAILABLE,
    DONATION_STATUS_COMPLETED,
    DONATION_STATUS_IN_TRANSIT,
    NOTIFICATION_TYPE_ACCOUNT_PENDING,
    NOTIFICATION_TYPE_DELIVERY_COMPLETE,
    NOTIFICATION_TYPE_EXPIRING_SOON,
    NOTIFICATION_TYPE_PICKUP_COMPLETE,
    SYSTEM_SENDER_ID,
    Donation,
    Notification,
    SyntheticKind,
    SyntheticNotificationId,
    User,
)
from app.utils import ensure_app_timezone, hours_between

DONATIONS_LINK = "/dashboard/donations"
VERIFICATIONS_LINK = "/dashboard/verify"

# Lifecycle statuses scanned for derived entries; expiring donations are
# queried separately by expiry time.
SYNTHETIC_DONATION_STATUSES = (
    DONATION_STATUS_COMPLETED,
    DONATION_STATUS_IN_TRANSIT,
)


def hours_until_expiry(donation: Donation, now: datetime) -> float | None:
    """Return the hours left before ``donation`` expires, or ``None`` if unknown."""

    if donation.expiry_time is None:
        return None
    return hours_between(now, donation.expiry_time)


def is_expiring_soon(donation: Donation, now: datetime, *, window_hours: int = 24) -> bool:
    """Return ``True`` when ``0 < expiry - now <= window_hours``."""

    if donation.status != DONATION_STATUS_AVAILABLE:
        return False
    remaining = hours_until_expiry(donation, now)
    if remaining is None:
        return False
    return 0 < remaining <= window_hours


def pending_user_entries(
    users: Iterable[User], *, channel_id: str, now: datetime
) -> list[Notification]:
    """Return one entry per account waiting for verification."""

    entries: list[Notification] = []
    for user in users:
        if user.id is None or not user.is_pending_verification():
            continue
        entries.append(
            Notification(
                id=str(SyntheticNotificationId(SyntheticKind.PENDING_USER, user.id)),
                recipient_id=channel_id,
                sender_id=SYSTEM_SENDER_ID,
                type=NOTIFICATION_TYPE_ACCOUNT_PENDING,
                title="Pending Verification",
                message=f"{user.display_label()} has registered and is waiting for approval",
                entity_id=user.id,
                link_to=VERIFICATIONS_LINK,
                is_read=False,
                created_at=ensure_app_timezone(user.created_at) or now,
            )
        )
    return entries


def donation_entries(
    donations: Iterable[Donation],
    *,
    channel_id: str,
    now: datetime,
    window_hours: int = 24,
) -> list[Notification]:
    """Return the lifecycle entries derived from ``donations``.

    A donation has a single status, so at most one of the completed, in-transit
    and expiring entries applies to it.
    """

    entries: list[Notification] = []
    for donation in donations:
        if donation.id is None:
            continue
        entry = _donation_entry(
            donation, channel_id=channel_id, now=now, window_hours=window_hours
        )
        if entry is not None:
            entries.append(entry)
    return entries


def _donation_entry(
    donation: Donation, *, channel_id: str, now: datetime, window_hours: int
) -> Notification | None:
    title = donation.title or "Unknown"
    changed_at = ensure_app_timezone(donation.last_changed_at()) or now

    if donation.status == DONATION_STATUS_COMPLETED:
        return _entry(
            SyntheticKind.DONATION_COMPLETED,
            donation,
            channel_id=channel_id,
            type=NOTIFICATION_TYPE_DELIVERY_COMPLETE,
            title="Delivery Completed",
            message=f'Donation "{title}" has been delivered successfully',
            created_at=changed_at,
        )

    if donation.status == DONATION_STATUS_IN_TRANSIT:
        vendor = donation.vendor_name or "Vendor"
        return _entry(
            SyntheticKind.DONATION_IN_TRANSIT,
            donation,
            channel_id=channel_id,
            type=NOTIFICATION_TYPE_PICKUP_COMPLETE,
            title="Pickup Completed",
            message=f'Driver has picked up "{title}" from {vendor}',
            created_at=changed_at,
        )

    if is_expiring_soon(donation, now, window_hours=window_hours):
        hours = math.ceil(hours_until_expiry(donation, now))
        return _entry(
            SyntheticKind.DONATION_EXPIRING,
            donation,
            channel_id=channel_id,
            type=NOTIFICATION_TYPE_EXPIRING_SOON,
            title="Donation Expiring Soon",
            message=f'"{title}" expires in {hours} hours',
            created_at=now,
        )

    return None


def _entry(
    kind: SyntheticKind,
    donation: Donation,
    *,
    channel_id: str,
    type: str,
    title: str,
    message: str,
    created_at: datetime,
) -> Notification:
    return Notification(
        id=str(SyntheticNotificationId(kind, donation.id)),
        recipient_id=channel_id,
        sender_id=SYSTEM_SENDER_ID,
        type=type,
        title=title,
        message=message,
        entity_id=donation.id,
        link_to=DONATIONS_LINK,
        is_read=False,
        created_at=created_at,
    )


__all__ = [
    "SYNTHETIC_DONATION_STATUSES",
    "donation_entries",
    "hours_until_expiry",
    "is_expiring_soon",
    "pending_user_entries",
]
