"""Repository implementations for infrastructure layer."""

from .audit_log_repository import AuditLogRepository
from .donation_repository import DonationRepository
from .notification_repository import NotificationRepository
from .role_repository import RoleRepository
from .user_repository import UserRepository

__all__ = [
    "AuditLogRepository",
    "DonationRepository",
    "NotificationRepository",
    "RoleRepository",
    "UserRepository",
]
