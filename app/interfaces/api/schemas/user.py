"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RoleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    alias: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None
    email: EmailStr
    verification_status: str
    verification_reason: str | None
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    role: RoleRead


class VerificationDecision(BaseModel):
    status: str = Field(..., description="approved or rejected")
    reason: str = Field(..., min_length=1)
