"""Persistence layer for donation listings."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import DONATION_STATUS_AVAILABLE, Donation
from app.infrastructure.models import DonationModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class DonationRepository:
    """Provide CRUD operations for :class:`Donation` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, donation_id: str) -> Donation | None:
        model = self.session.get(DonationModel, donation_id)
        return self._to_entity(model) if model else None

    def list(
        self,
        *,
        statuses: Iterable[str] | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> Sequence[Donation]:
        """Return donations, most recently changed first."""

        query = self.session.query(DonationModel)
        if statuses is not None:
            query = query.filter(DonationModel.status.in_(list(statuses)))
        query = query.order_by(
            func.coalesce(DonationModel.updated_at, DonationModel.created_at).desc(),
            DonationModel.id,
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_expiring(
        self,
        *,
        now: datetime,
        window_hours: int,
        limit: int | None = 100,
    ) -> Sequence[Donation]:
        """Return available donations with ``now < expiry_time <= now + window``.

        Soonest expiry first, independently of how many other donations changed
        recently.
        """

        start = ensure_app_naive_datetime(now)
        end = start + timedelta(hours=window_hours)
        query = (
            self.session.query(DonationModel)
            .filter(
                DonationModel.status == DONATION_STATUS_AVAILABLE,
                DonationModel.expiry_time > start,
                DonationModel.expiry_time <= end,
            )
            .order_by(DonationModel.expiry_time, DonationModel.id)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, donation: Donation) -> Donation:
        model = DonationModel()
        if donation.id is not None:
            model.id = donation.id
        self._apply_entity_to_model(model, donation)
        if donation.created_at is not None:
            model.created_at = ensure_app_naive_datetime(donation.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, donation: Donation) -> Donation:
        if donation.id is None:
            raise ValueError("Donation id is required for updates")
        model = self.session.get(DonationModel, donation.id)
        if model is None:
            msg = f"Donation with id {donation.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, donation)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: DonationModel, donation: Donation) -> None:
        model.vendor_id = donation.vendor_id
        model.vendor_name = donation.vendor_name
        model.title = donation.title
        model.status = donation.status
        model.expiry_time = ensure_app_naive_datetime(donation.expiry_time)
        model.updated_at = ensure_app_naive_datetime(donation.updated_at)

    @staticmethod
    def _to_entity(model: DonationModel) -> Donation:
        return Donation(
            id=model.id,
            vendor_id=model.vendor_id,
            vendor_name=model.vendor_name,
            title=model.title,
            status=model.status,
            expiry_time=ensure_app_timezone(model.expiry_time),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["DonationRepository"]
