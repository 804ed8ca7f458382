"""Use cases for recording and browsing audit log entries."""

from sqlalchemy.orm import Session

from app.domain.entities import AuditLog
from app.infrastructure.repositories import AuditLogRepository
from app.utils import now_in_app_timezone


def record_audit_log(
    session: Session,
    *,
    actor_id: str | None,
    action: str,
    details: str,
    category: str,
    target_id: str | None = None,
) -> AuditLog:
    """Persist an audit entry describing an administrative action."""

    entry = AuditLog(
        id=None,
        actor_id=actor_id,
        action=action,
        details=details,
        category=category,
        target_id=target_id,
        created_at=now_in_app_timezone(),
    )
    return AuditLogRepository(session).create(entry)


def list_audit_logs(
    session: Session, *, category: str | None = None, limit: int = 100
) -> list[AuditLog]:
    """Return the latest audit entries optionally filtered by category."""

    repository = AuditLogRepository(session)
    return repository.list(category=category, limit=limit)


__all__ = [
    "list_audit_logs",
    "record_audit_log",
]
