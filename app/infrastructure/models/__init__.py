"""ORM models used by the application infrastructure."""

from .audit_log import AuditLogModel
from .donation import DonationModel
from .notification import NotificationModel, generate_notification_id
from .role import RoleModel
from .user import UserModel

__all__ = [
    "AuditLogModel",
    "DonationModel",
    "NotificationModel",
    "RoleModel",
    "UserModel",
    "generate_notification_id",
]
