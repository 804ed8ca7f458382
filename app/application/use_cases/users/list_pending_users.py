"""Use case for listing accounts awaiting verification."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository


def list_pending_users(session: Session) -> Sequence[User]:
    return UserRepository(session).list_pending_verification()
