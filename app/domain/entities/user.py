"""Domain entity representing a platform user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role

VERIFICATION_PENDING = "pending"
VERIFICATION_APPROVED = "approved"
VERIFICATION_REJECTED = "rejected"

VERIFICATION_DECISIONS = (VERIFICATION_APPROVED, VERIFICATION_REJECTED)


@dataclass
class User:
    """Core attributes describing a platform account."""

    id: str | None
    role: Role
    name: str | None
    email: str
    password: str
    verification_status: str
    verification_reason: str | None
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_pending_verification(self) -> bool:
        return self.verification_status == VERIFICATION_PENDING

    def display_label(self) -> str:
        """Return the name shown to administrators for this account."""

        return (self.name or "").strip() or (self.email or "").strip() or "New User"


__all__ = [
    "User",
    "VERIFICATION_PENDING",
    "VERIFICATION_APPROVED",
    "VERIFICATION_REJECTED",
    "VERIFICATION_DECISIONS",
]
