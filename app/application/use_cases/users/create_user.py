"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import VERIFICATION_APPROVED, VERIFICATION_PENDING, User
from app.infrastructure.repositories import RoleRepository, UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone

from .validators import normalize_email


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    role_alias: str,
    name: str | None = None,
    verified: bool = False,
) -> User:
    """Create a new account ensuring unique email addresses.

    Accounts start pending verification unless ``verified`` is set, which is
    how administrators are bootstrapped.
    """

    repository = UserRepository(session)
    email = normalize_email(email)

    if repository.get_by_email(email):
        raise ValueError("Email is already registered")
    if not password:
        raise ValueError("Password is required")

    role = RoleRepository(session).get_or_create(role_alias)

    user = User(
        id=None,
        role=role,
        name=name,
        email=email,
        password=get_password_hash(password),
        verification_status=VERIFICATION_APPROVED if verified else VERIFICATION_PENDING,
        verification_reason=None,
        is_active=True,
        last_login=None,
        created_at=now_in_app_timezone(),
        updated_at=None,
    )

    return repository.create(user)
