"""Use cases for browsing donations and moving them through their lifecycle."""

import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.audit_logs import record_audit_log
from app.application.use_cases.notifications import notify_donation_status_changed
from app.domain.entities import (
    DONATION_STATUS_COMPLETED,
    DONATION_STATUS_IN_TRANSIT,
    DONATION_STATUSES,
    Donation,
)
from app.infrastructure.repositories import DonationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_AUDIT_ACTIONS = {
    DONATION_STATUS_IN_TRANSIT: (
        "Donation Pickup",
        "Pickup completed for {title} from {vendor}",
    ),
    DONATION_STATUS_COMPLETED: (
        "Donation Delivered",
        "Donation {title} delivered successfully",
    ),
}


def list_donations(
    session: Session,
    *,
    status: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[Donation]:
    """Return donations, optionally restricted to a single status."""

    statuses = [status] if status else None
    return DonationRepository(session).list(statuses=statuses, skip=skip, limit=limit)


def update_donation_status(
    session: Session,
    donation_id: str,
    *,
    status: str,
    actor_id: str | None = None,
) -> Donation:
    """Change the status of a donation and emit the matching notification."""

    normalized = (status or "").strip().lower()
    if normalized not in DONATION_STATUSES:
        raise ValueError("Invalid donation status")

    repository = DonationRepository(session)
    donation = repository.get(donation_id)
    if donation is None:
        raise LookupError("Donation not found")

    donation.status = normalized
    donation.updated_at = now_in_app_timezone()
    updated = repository.update(donation)

    try:
        _record_status_change(session, updated, actor_id=actor_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Donation %s moved to %s but its notification or audit entry was not stored",
            updated.id,
            normalized,
        )
    return updated


def _record_status_change(
    session: Session, donation: Donation, *, actor_id: str | None
) -> None:
    notify_donation_status_changed(session, donation=donation)

    audit = _AUDIT_ACTIONS.get(donation.status)
    if audit is None:
        return
    action, template = audit
    record_audit_log(
        session,
        actor_id=actor_id or "system",
        action=action,
        details=template.format(
            title=donation.title or "Donation",
            vendor=donation.vendor_name or "Vendor",
        ),
        category="Logistics",
        target_id=donation.id,
    )


__all__ = ["list_donations", "update_donation_status"]
