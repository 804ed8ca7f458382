from .audit_log import AuditLogRead
from .auth import Token
from .donation import DonationRead, DonationStatusUpdate
from .notification import (
    ExpiringDonationsCheckResponse,
    NotificationCreate,
    NotificationFeedRead,
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)
from .user import RoleRead, UserRead, VerificationDecision

__all__ = [
    "AuditLogRead",
    "DonationRead",
    "DonationStatusUpdate",
    "ExpiringDonationsCheckResponse",
    "NotificationCreate",
    "NotificationFeedRead",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "RoleRead",
    "Token",
    "UserRead",
    "VerificationDecision",
]
