"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Notification, is_reserved_notification_id
from app.infrastructure.models import NotificationModel, generate_notification_id
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide read, create and read-state operations for :class:`Notification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_recipients(
        self,
        recipient_ids: Iterable[str],
        *,
        limit: int | None = 100,
    ) -> Sequence[Notification]:
        """Return notifications addressed to any of ``recipient_ids``."""

        recipients = sorted({recipient for recipient in recipient_ids if recipient})
        if not recipients:
            return []
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id.in_(recipients))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        model.id = self._resolve_new_id(notification.id)
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(
        self,
        notification_ids: Iterable[str],
        *,
        recipient_ids: Iterable[str],
    ) -> int:
        """Flag unread notifications as read in a single statement.

        Only documents addressed to ``recipient_ids`` are touched. Returns the
        number of documents that moved from unread to read.
        """

        ids = sorted({notification_id for notification_id in notification_ids if notification_id})
        recipients = sorted({recipient for recipient in recipient_ids if recipient})
        if not ids or not recipients:
            return 0
        try:
            updated = (
                self.session.query(NotificationModel)
                .filter(
                    NotificationModel.id.in_(ids),
                    NotificationModel.recipient_id.in_(recipients),
                    NotificationModel.is_read.is_(False),
                )
                .update(
                    {
                        NotificationModel.is_read: True,
                        NotificationModel.read_at: ensure_app_naive_datetime(
                            now_in_app_timezone()
                        ),
                    },
                    synchronize_session=False,
                )
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return int(updated or 0)

    @staticmethod
    def _resolve_new_id(requested: str | None) -> str:
        if requested is None:
            return generate_notification_id()
        if is_reserved_notification_id(requested):
            msg = f"Notification id '{requested}' uses a reserved prefix"
            raise ValueError(msg)
        return requested

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.recipient_id = notification.recipient_id
        model.sender_id = notification.sender_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.entity_id = notification.entity_id
        model.link_to = notification.link_to
        model.payload = notification.payload or {}
        model.is_read = bool(notification.is_read)
        model.created_at = (
            ensure_app_naive_datetime(notification.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            type=model.type,
            title=model.title,
            message=model.message,
            entity_id=model.entity_id,
            link_to=model.link_to,
            payload=model.payload or {},
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
