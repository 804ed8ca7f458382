"""Domain entity representing a food donation listing."""

from dataclasses import dataclass
from datetime import datetime

DONATION_STATUS_AVAILABLE = "available"
DONATION_STATUS_IN_TRANSIT = "in-transit"
DONATION_STATUS_COMPLETED = "completed"
DONATION_STATUS_CANCELLED = "cancelled"
DONATION_STATUS_EXPIRED = "expired"

DONATION_STATUSES = (
    DONATION_STATUS_AVAILABLE,
    "assigned",
    DONATION_STATUS_IN_TRANSIT,
    DONATION_STATUS_COMPLETED,
    DONATION_STATUS_CANCELLED,
    DONATION_STATUS_EXPIRED,
)


@dataclass
class Donation:
    """Food offered by a vendor and tracked until delivery."""

    id: str | None
    vendor_id: str | None
    vendor_name: str | None
    title: str | None
    status: str
    expiry_time: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    def last_changed_at(self) -> datetime | None:
        """Return the most recent lifecycle timestamp known for the donation."""

        return self.updated_at or self.created_at


__all__ = [
    "Donation",
    "DONATION_STATUSES",
    "DONATION_STATUS_AVAILABLE",
    "DONATION_STATUS_IN_TRANSIT",
    "DONATION_STATUS_COMPLETED",
    "DONATION_STATUS_CANCELLED",
    "DONATION_STATUS_EXPIRED",
]
