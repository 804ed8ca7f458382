"""Helpers that persist notifications when domain events happen."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    DONATION_STATUS_COMPLETED,
    DONATION_STATUS_IN_TRANSIT,
    NOTIFICATION_TYPE_DELIVERY_COMPLETE,
    NOTIFICATION_TYPE_DONATION_EXPIRING,
    NOTIFICATION_TYPE_PICKUP_COMPLETE,
    NOTIFICATION_TYPE_VERIFICATION_DECISION,
    SYSTEM_SENDER_ID,
    Donation,
    Notification,
    VERIFICATION_APPROVED,
    User,
)
from app.infrastructure.repositories import DonationRepository, NotificationRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .synthetic import DONATIONS_LINK, hours_until_expiry, is_expiring_soon

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    recipient_id: str,
    type: str,
    title: str,
    message: str,
    sender_id: str | None = None,
    entity_id: str | None = None,
    link_to: str | None = None,
    payload: dict[str, Any] | None = None,
) -> Notification:
    """Persist an unread notification with a store-generated id."""

    if not recipient_id or not type or not title or not message:
        raise ValueError("recipient_id, type, title and message are required")

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        sender_id=sender_id or SYSTEM_SENDER_ID,
        type=type,
        title=title,
        message=message,
        entity_id=entity_id,
        link_to=link_to,
        payload=payload or {},
        is_read=False,
        created_at=now_in_app_timezone(),
        read_at=None,
    )
    saved = NotificationRepository(session).create(notification)
    logger.info("Notification %s created for recipient %s: %s", saved.id, recipient_id, title)
    return saved


def notify_verification_decision(
    session: Session, *, user: User, actor_id: str | None = None
) -> Notification:
    """Tell ``user`` about the outcome of their account verification."""

    approved = user.verification_status == VERIFICATION_APPROVED
    title = "Account Approved" if approved else "Account Rejected"
    message = (
        "Your account has been verified. You can now use the platform."
        if approved
        else "Your account verification was rejected."
    )
    if user.verification_reason:
        message = f"{message} Reason: {user.verification_reason}"
    return create_notification(
        session,
        recipient_id=user.id,
        sender_id=actor_id,
        type=NOTIFICATION_TYPE_VERIFICATION_DECISION,
        title=title,
        message=message,
        entity_id=user.id,
        payload={"verification_status": user.verification_status},
    )


def notify_donation_status_changed(
    session: Session, *, donation: Donation
) -> Notification | None:
    """Notify administrators when a donation is picked up or delivered."""

    channel_id = get_settings().admin_channel_id
    title = donation.title or "Donation"
    vendor_name = donation.vendor_name or "Vendor"
    payload = {"donation_id": donation.id, "vendor_name": vendor_name}

    if donation.status == DONATION_STATUS_IN_TRANSIT:
        return create_notification(
            session,
            recipient_id=channel_id,
            type=NOTIFICATION_TYPE_PICKUP_COMPLETE,
            title="Pickup Completed",
            message=f'{vendor_name} donation "{title}" picked up',
            entity_id=donation.id,
            link_to=DONATIONS_LINK,
            payload=payload,
        )
    if donation.status == DONATION_STATUS_COMPLETED:
        return create_notification(
            session,
            recipient_id=channel_id,
            type=NOTIFICATION_TYPE_DELIVERY_COMPLETE,
            title="Delivery Completed",
            message=f'Donation "{title}" successfully delivered',
            entity_id=donation.id,
            link_to=DONATIONS_LINK,
            payload=payload,
        )
    return None


def notify_expiring_donations(session: Session, *, now: datetime | None = None) -> int:
    """Persist an administrator notification for each donation about to expire."""

    settings = get_settings()
    now = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    donations = DonationRepository(session).list_expiring(
        now=now, window_hours=settings.expiry_window_hours, limit=None
    )

    created = 0
    for donation in donations:
        if not is_expiring_soon(donation, now, window_hours=settings.expiry_window_hours):
            continue
        hours_remaining = math.floor(hours_until_expiry(donation, now))
        plural = "s" if hours_remaining != 1 else ""
        create_notification(
            session,
            recipient_id=settings.admin_channel_id,
            type=NOTIFICATION_TYPE_DONATION_EXPIRING,
            title="Donation Expiring Soon",
            message=(
                f'"{donation.title or "Donation"}" from {donation.vendor_name or "Vendor"} '
                f"expires in {hours_remaining} hour{plural}"
            ),
            entity_id=donation.id,
            link_to=DONATIONS_LINK,
            payload={
                "donation_id": donation.id,
                "expiry_time": donation.expiry_time.isoformat(),
                "hours_remaining": hours_remaining,
            },
        )
        created += 1
    return created


__all__ = [
    "create_notification",
    "notify_donation_status_changed",
    "notify_expiring_donations",
    "notify_verification_decision",
]
