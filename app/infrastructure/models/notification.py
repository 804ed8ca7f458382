"""SQLAlchemy model for persisted notifications."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def generate_notification_id() -> str:
    """Return a new store id; hexadecimal only, so never a reserved prefix."""

    return uuid4().hex


class NotificationModel(Base):
    """Database representation of a notification addressed to a recipient."""

    __tablename__ = "notification"

    id = Column(String(64), primary_key=True, default=generate_notification_id)
    recipient_id = Column(String(64), nullable=False, index=True)
    sender_id = Column(String(64), nullable=False, default="system")
    type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    entity_id = Column(String(64), nullable=True)
    link_to = Column(String(255), nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel", "generate_notification_id"]
