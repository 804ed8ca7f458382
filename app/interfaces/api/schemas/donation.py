"""Schemas for donation endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DonationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    vendor_id: str | None
    vendor_name: str | None
    title: str | None
    status: str
    expiry_time: datetime | None
    created_at: datetime | None
    updated_at: datetime | None


class DonationStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=30)


__all__ = ["DonationRead", "DonationStatusUpdate"]
