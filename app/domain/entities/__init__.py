"""Domain entities exposed by the application."""

from .audit_log import AuditLog
from .donation import (
    DONATION_STATUS_AVAILABLE,
    DONATION_STATUS_CANCELLED,
    DONATION_STATUS_COMPLETED,
    DONATION_STATUS_EXPIRED,
    DONATION_STATUS_IN_TRANSIT,
    DONATION_STATUSES,
    Donation,
)
from .notification import (
    NOTIFICATION_TYPE_ACCOUNT_PENDING,
    NOTIFICATION_TYPE_DELIVERY_COMPLETE,
    NOTIFICATION_TYPE_DONATION_EXPIRING,
    NOTIFICATION_TYPE_EXPIRING_SOON,
    NOTIFICATION_TYPE_PICKUP_COMPLETE,
    NOTIFICATION_TYPE_VERIFICATION_DECISION,
    SYSTEM_SENDER_ID,
    Notification,
    NotificationId,
    PersistedNotificationId,
    SyntheticKind,
    SyntheticNotificationId,
    is_reserved_notification_id,
    parse_notification_id,
)
from .role import Role
from .user import (
    VERIFICATION_APPROVED,
    VERIFICATION_DECISIONS,
    VERIFICATION_PENDING,
    VERIFICATION_REJECTED,
    User,
)
from .viewer import Viewer

__all__ = [
    "AuditLog",
    "Donation",
    "DONATION_STATUSES",
    "DONATION_STATUS_AVAILABLE",
    "DONATION_STATUS_IN_TRANSIT",
    "DONATION_STATUS_COMPLETED",
    "DONATION_STATUS_CANCELLED",
    "DONATION_STATUS_EXPIRED",
    "Notification",
    "NotificationId",
    "PersistedNotificationId",
    "SyntheticNotificationId",
    "SyntheticKind",
    "parse_notification_id",
    "is_reserved_notification_id",
    "NOTIFICATION_TYPE_ACCOUNT_PENDING",
    "NOTIFICATION_TYPE_DELIVERY_COMPLETE",
    "NOTIFICATION_TYPE_PICKUP_COMPLETE",
    "NOTIFICATION_TYPE_EXPIRING_SOON",
    "NOTIFICATION_TYPE_DONATION_EXPIRING",
    "NOTIFICATION_TYPE_VERIFICATION_DECISION",
    "SYSTEM_SENDER_ID",
    "Role",
    "User",
    "VERIFICATION_PENDING",
    "VERIFICATION_APPROVED",
    "VERIFICATION_REJECTED",
    "VERIFICATION_DECISIONS",
    "Viewer",
]
