"""SQLAlchemy model for administrative audit records."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class AuditLogModel(Base):
    """Database representation of audit events."""

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String(64), nullable=True, index=True)
    action = Column(String(100), nullable=False)
    details = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    target_id = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["AuditLogModel"]
