"""Domain entity representing a user role."""

from dataclasses import dataclass


@dataclass
class Role:
    """Role assigned to a platform account (admin, vendor, ngo, volunteer...)."""

    id: int
    name: str
    alias: str


__all__ = ["Role"]
