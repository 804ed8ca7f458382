"""Aggregate application use cases."""

from .audit_logs import list_audit_logs, record_audit_log
from .donations import list_donations, update_donation_status
from .notifications import build_feed, mark_read
from .users import authenticate_user, create_user, verify_user

__all__ = [
    "authenticate_user",
    "build_feed",
    "create_user",
    "list_audit_logs",
    "list_donations",
    "mark_read",
    "record_audit_log",
    "update_donation_status",
    "verify_user",
]
