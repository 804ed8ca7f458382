"""Routes for inspecting audit log entries."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.application.use_cases.audit_logs import list_audit_logs as list_audit_logs_uc
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import AuditLogRead

router = APIRouter(prefix="/audit-logs", tags=["audit_logs"])


@router.get("/", response_model=list[AuditLogRead])
def list_audit_logs(
    category: str | None = None,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[AuditLogRead]:
    """Return the latest audit entries optionally filtered by category."""

    entries = list_audit_logs_uc(db, category=category, limit=limit)
    return [AuditLogRead.model_validate(entry) for entry in entries]


__all__ = ["router"]
