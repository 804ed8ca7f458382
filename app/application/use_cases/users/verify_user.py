"""Use case for recording an administrator's verification decision."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.audit_logs import record_audit_log
from app.application.use_cases.notifications import notify_verification_decision
from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.utils import now_in_app_timezone

from .validators import validate_verification_decision

logger = logging.getLogger(__name__)


def verify_user(
    session: Session,
    user_id: str,
    *,
    status: str,
    reason: str | None,
    actor: User,
) -> User:
    """Approve or reject ``user_id`` and let the account holder know.

    The decision is stored first. Failing to write the audit entry or the
    notification afterwards is logged and does not undo it.
    """

    decision, cleaned_reason = validate_verification_decision(status, reason)

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise LookupError("User not found")

    user.verification_status = decision
    user.verification_reason = cleaned_reason
    user.updated_at = now_in_app_timezone()
    updated = repository.update(user)

    try:
        record_audit_log(
            session,
            actor_id=actor.id,
            action=f"User {decision}",
            details=f"Admin {decision} user verification. Reason: {cleaned_reason}",
            category="verification",
            target_id=updated.id,
        )
        notify_verification_decision(session, user=updated, actor_id=actor.id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "User %s marked %s but the audit entry or notification was not stored",
            updated.id,
            decision,
        )
    return updated
