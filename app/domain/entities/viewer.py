"""Identity of the caller reading or updating a notification feed."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Viewer:
    """Resolved session identity: the user id and its role alias."""

    id: str
    role: str


__all__ = ["Viewer"]
