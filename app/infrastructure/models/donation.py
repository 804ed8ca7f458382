"""SQLAlchemy model for donation listings."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, String

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class DonationModel(Base):
    """Database representation of a donation offered by a vendor."""

    __tablename__ = "donation"

    id = Column(String(64), primary_key=True, default=lambda: uuid4().hex)
    vendor_id = Column(String(64), nullable=True, index=True)
    vendor_name = Column(String(120), nullable=True)
    title = Column(String(200), nullable=True)
    status = Column(String(30), nullable=False, index=True)
    expiry_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True)


__all__ = ["DonationModel"]
