"""Endpoints serving the notification feed and its producers."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    build_feed,
    create_notification,
    mark_read,
    notify_expiring_donations,
)
from app.domain.entities import Notification, User, Viewer
from app.domain.exceptions import FeedUnavailable, InvalidRequest, Unauthenticated
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_viewer, require_admin
from app.interfaces.api.schemas import (
    ExpiringDonationsCheckResponse,
    NotificationCreate,
    NotificationFeedRead,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get(
    "/",
    response_model=NotificationFeedRead,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Store unavailable; empty feed"}},
)
def list_notifications(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
):
    """Return the merged notification feed for the authenticated user.

    Clients poll this endpoint; derived entries are recomputed on every call.
    """

    try:
        feed = build_feed(db, viewer)
    except Unauthenticated as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except FeedUnavailable as exc:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc), "notifications": [], "unread_count": 0},
        )

    entries = [_notification_to_schema(notification) for notification in feed]
    return NotificationFeedRead(
        notifications=entries,
        unread_count=sum(1 for entry in entries if not entry.is_read),
    )


@router.post("/mark-read", response_model=NotificationMarkReadResponse)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> NotificationMarkReadResponse:
    """Mark stored entries as read; derived entries are accepted and skipped."""

    try:
        marked = mark_read(db, viewer, payload.ids)
    except Unauthenticated as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except InvalidRequest as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except FeedUnavailable as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return NotificationMarkReadResponse(marked=marked)


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification_entry(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> NotificationRead:
    """Store a notification for a user or for the administrative channel."""

    try:
        notification = create_notification(
            db,
            recipient_id=payload.recipient_id,
            type=payload.type,
            title=payload.title,
            message=payload.message,
            sender_id=payload.sender_id,
            entity_id=payload.entity_id,
            link_to=payload.link_to,
            payload=payload.payload,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _notification_to_schema(notification)


@router.post("/check-expiring", response_model=ExpiringDonationsCheckResponse)
def check_expiring_donations(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> ExpiringDonationsCheckResponse:
    """Store an expiry warning for every available donation about to expire."""

    count = notify_expiring_donations(db)
    logger.info("Created %s expiring donation notification(s)", count)
    return ExpiringDonationsCheckResponse(count=count)


__all__ = ["router"]
