"""Domain entity representing an administrative audit entry."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class AuditLog:
    """Record of an action performed through the admin console."""

    id: int | None
    actor_id: str | None
    action: str
    details: str
    category: str
    target_id: str | None
    created_at: datetime | None


__all__ = ["AuditLog"]
