"""Routes for browsing donations and updating their status."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.donations import (
    list_donations as list_donations_uc,
    update_donation_status as update_donation_status_uc,
)
from app.domain.entities import Donation, User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import DonationRead, DonationStatusUpdate

router = APIRouter(prefix="/donations", tags=["donations"])


def _to_read_model(donation: Donation) -> DonationRead:
    return DonationRead.model_validate(donation)


@router.get("/", response_model=list[DonationRead])
def list_donations(
    status_filter: str | None = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[DonationRead]:
    donations = list_donations_uc(db, status=status_filter, skip=skip, limit=limit)
    return [_to_read_model(donation) for donation in donations]


@router.post("/{donation_id}/status", response_model=DonationRead)
def update_donation_status(
    donation_id: str,
    payload: DonationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> DonationRead:
    """Move a donation to a new status, notifying administrators on pickup and delivery."""

    try:
        donation = update_donation_status_uc(
            db, donation_id, status=payload.status, actor_id=current_user.id
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(donation)


__all__ = ["router"]
