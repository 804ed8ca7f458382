"""Shared validation helpers for user use cases."""

from app.domain.entities import VERIFICATION_DECISIONS


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lower-cased, rejecting obviously invalid values."""

    normalized = (email or "").strip().lower()
    if "@" not in normalized:
        raise ValueError("A valid email address is required")
    return normalized


def validate_verification_decision(status: str, reason: str | None) -> tuple[str, str]:
    """Return the normalized decision and reason or raise ``ValueError``."""

    normalized = (status or "").strip().lower()
    if normalized not in VERIFICATION_DECISIONS:
        raise ValueError("Invalid status")
    cleaned_reason = (reason or "").strip()
    if not cleaned_reason:
        raise ValueError("A reason is required")
    return normalized, cleaned_reason
