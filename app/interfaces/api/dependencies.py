"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import User, Viewer
from app.domain.exceptions import Unauthenticated
from app.infrastructure.database import get_db
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import (
    decode_access_token,
    password_signature,
    refresh_access_token,
)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str | None, db: Session) -> User:
    """Resolve the authenticated user for the provided token.

    Raises :class:`Unauthenticated` without querying the store when the token
    is missing or cannot be decoded.
    """

    if not token:
        raise Unauthenticated("Not authenticated")

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise Unauthenticated() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise Unauthenticated()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise Unauthenticated("User not found")

    if signature_claim != password_signature(user.password, user.is_active):
        raise Unauthenticated()

    return user


def get_current_user(
    request: Request,
    response: Response,
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    try:
        user = resolve_current_user(token, db)
        refreshed_token = refresh_access_token(token)
    except Unauthenticated as exc:
        raise _unauthorized(str(exc)) from exc
    except ValueError as exc:
        raise _unauthorized() from exc

    response.headers["X-Refreshed-Token"] = refreshed_token
    request.state.refreshed_token = refreshed_token

    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def get_current_viewer(current_user: User = Depends(get_current_active_user)) -> Viewer:
    """Return the identity used to build and update notification feeds."""

    return Viewer(id=current_user.id, role=current_user.role.alias)


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not get_settings().is_admin_role(current_user.role.alias):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user
