"""Use case for exchanging an email and password for a signed-in account."""

import logging
from enum import Enum, auto
from typing import NamedTuple

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password
from app.utils import now_in_app_timezone

from .validators import normalize_email

logger = logging.getLogger(__name__)


class AuthenticationStatus(Enum):
    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    INACTIVE = auto()


class AuthenticationResult(NamedTuple):
    user: User | None
    status: AuthenticationStatus


def authenticate_user(session: Session, email: str, password: str) -> AuthenticationResult:
    """Check the credentials and stamp the login time on success.

    Unknown accounts and wrong passwords are indistinguishable to the caller.
    Inactive accounts are reported separately so the route can answer 403.
    """

    try:
        normalized = normalize_email(email)
    except ValueError:
        return AuthenticationResult(None, AuthenticationStatus.INVALID_CREDENTIALS)

    repository = UserRepository(session)
    user = repository.get_by_email(normalized)
    if user is None or not verify_password(password, user.password):
        logger.info("Rejected login for %s: invalid credentials", normalized)
        return AuthenticationResult(None, AuthenticationStatus.INVALID_CREDENTIALS)

    if not user.is_active:
        return AuthenticationResult(user, AuthenticationStatus.INACTIVE)

    user.last_login = now_in_app_timezone()
    repository.touch_last_login(user.id, user.last_login)
    return AuthenticationResult(user, AuthenticationStatus.SUCCESS)
