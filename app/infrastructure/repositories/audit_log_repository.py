"""Persistence layer for audit log records."""

from typing import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import AuditLog
from app.infrastructure.models import AuditLogModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class AuditLogRepository:
    """Provide helpers to record and browse :class:`AuditLog` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: AuditLog) -> AuditLog:
        model = AuditLogModel()
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list(self, *, category: str | None = None, limit: int = 100) -> list[AuditLog]:
        """Return the latest audit entries, optionally filtered by category."""

        query = self.session.query(AuditLogModel)
        if category is not None:
            query = query.filter(AuditLogModel.category == category)

        models: Iterable[AuditLogModel] = (
            query.order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: AuditLogModel) -> AuditLog:
        return AuditLog(
            id=model.id,
            actor_id=model.actor_id,
            action=model.action,
            details=model.details,
            category=model.category,
            target_id=model.target_id,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: AuditLogModel, entry: AuditLog) -> None:
        model.actor_id = entry.actor_id
        model.action = entry.action
        model.details = entry.details
        model.category = entry.category
        model.target_id = entry.target_id
        model.created_at = (
            ensure_app_naive_datetime(entry.created_at)
            or ensure_app_naive_datetime(now_in_app_timezone())
        )


__all__ = ["AuditLogRepository"]
