"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class NotificationRead(BaseModel):
    """Representation of a feed entry delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    recipient_id: str
    sender_id: str
    type: str
    title: str
    message: str
    entity_id: str | None = None
    link_to: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    is_synthetic: bool = Field(
        default=False,
        description="Derived from current state; reappears until its condition clears",
    )
    created_at: datetime


class NotificationFeedRead(BaseModel):
    """Feed returned to a polling client."""

    notifications: list[NotificationRead]
    unread_count: int


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of feed entries as read."""

    ids: list[StrictStr] = Field(..., description="Identifiers of stored or derived entries")


class NotificationMarkReadResponse(BaseModel):
    marked: int


class NotificationCreate(BaseModel):
    """Payload used by producers to store a notification."""

    recipient_id: str = Field(..., min_length=1, max_length=64)
    type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    sender_id: str | None = Field(default=None, max_length=64)
    entity_id: str | None = Field(default=None, max_length=64)
    link_to: str | None = Field(default=None, max_length=255)
    payload: dict[str, Any] = Field(default_factory=dict)


class ExpiringDonationsCheckResponse(BaseModel):
    count: int


__all__ = [
    "ExpiringDonationsCheckResponse",
    "NotificationCreate",
    "NotificationFeedRead",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
]
