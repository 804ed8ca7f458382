"""Errors raised by the notification feed and the use cases around it."""


class Unauthenticated(Exception):
    """The caller presented no valid session."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidRequest(ValueError):
    """The request payload is malformed and was rejected before any store access."""


class FeedUnavailable(RuntimeError):
    """The document store failed or timed out while serving the feed."""

    def __init__(self, message: str = "Notifications are temporarily unavailable") -> None:
        super().__init__(message)


__all__ = ["Unauthenticated", "InvalidRequest", "FeedUnavailable"]
