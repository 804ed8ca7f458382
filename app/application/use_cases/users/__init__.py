"""Use cases for managing users."""

from .authenticate_user import (
    AuthenticationResult,
    AuthenticationStatus,
    authenticate_user,
)
from .create_user import create_user
from .list_pending_users import list_pending_users
from .verify_user import verify_user

__all__ = [
    "AuthenticationResult",
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "list_pending_users",
    "verify_user",
]
