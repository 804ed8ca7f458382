"""Routes for the current account and for verification decisions."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.users import (
    list_pending_users as list_pending_users_uc,
    verify_user as verify_user_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user, require_admin
from app.interfaces.api.schemas import UserRead, VerificationDecision

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated account."""

    return _to_read_model(current_user)


@router.get("/pending", response_model=list[UserRead])
def list_pending_users(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Return the accounts waiting for an administrator's decision."""

    return [_to_read_model(user) for user in list_pending_users_uc(db)]


@router.post("/{user_id}/verification", response_model=UserRead)
def decide_verification(
    user_id: str,
    decision: VerificationDecision,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Approve or reject the account identified by ``user_id``."""

    try:
        user = verify_user_uc(
            db,
            user_id,
            status=decision.status,
            reason=decision.reason,
            actor=current_user,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("User %s marked %s by %s", user.id, user.verification_status, current_user.id)
    return _to_read_model(user)
