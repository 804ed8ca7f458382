"""SQLAlchemy model for account roles."""

from sqlalchemy import Column, Integer, String

from app.infrastructure.database import Base


class RoleModel(Base):
    """Database representation of a role such as ``admin`` or ``vendor``."""

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    alias = Column(String(30), nullable=False, unique=True, index=True)


__all__ = ["RoleModel"]
