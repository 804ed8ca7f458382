"""SQLAlchemy model for the user collection."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _generate_id() -> str:
    return uuid4().hex


class UserModel(Base):
    """Database representation of a platform account."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True, default=_generate_id)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    name = Column(String(120), nullable=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    verification_status = Column(String(20), nullable=False, default="pending", index=True)
    verification_reason = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True)

    role = relationship("RoleModel", lazy="joined")


__all__ = ["UserModel"]
