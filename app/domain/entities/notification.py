"""Domain entities describing notification feed entries and their identifiers.

Every entry in a feed is addressed by a :data:`NotificationId`, which is either
a :class:`PersistedNotificationId` (a document stored by the database) or a
:class:`SyntheticNotificationId` (a projection of the current state of another
entity, rebuilt on every read). Raw identifiers travel as strings on the wire
and are parsed once with :func:`parse_notification_id`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

NOTIFICATION_TYPE_ACCOUNT_PENDING = "accountPending"
NOTIFICATION_TYPE_DELIVERY_COMPLETE = "delivery_complete"
NOTIFICATION_TYPE_PICKUP_COMPLETE = "pickup_complete"
NOTIFICATION_TYPE_EXPIRING_SOON = "expiring_soon"
NOTIFICATION_TYPE_DONATION_EXPIRING = "donation_expiring"
NOTIFICATION_TYPE_VERIFICATION_DECISION = "verification_decision"

SYSTEM_SENDER_ID = "system"


class SyntheticKind(str, Enum):
    """Kinds of derived feed entries. The value doubles as the id prefix."""

    PENDING_USER = "pending_user"
    DONATION_COMPLETED = "donation_completed"
    DONATION_IN_TRANSIT = "donation_transit"
    DONATION_EXPIRING = "donation_expiring"

    @property
    def prefix(self) -> str:
        return f"{self.value}_"


@dataclass(frozen=True)
class PersistedNotificationId:
    """Identifier generated by the store for a persisted notification."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SyntheticNotificationId:
    """Identifier of a derived entry: its kind plus the source entity id."""

    kind: SyntheticKind
    source_id: str

    def __str__(self) -> str:
        return f"{self.kind.prefix}{self.source_id}"


NotificationId = Union[PersistedNotificationId, SyntheticNotificationId]


def parse_notification_id(raw: str) -> NotificationId:
    """Classify ``raw`` as a persisted or a synthetic notification id.

    Reserved prefixes are only ever produced by :class:`SyntheticNotificationId`;
    the store generates hexadecimal ids which cannot start with any of them.
    """

    for kind in SyntheticKind:
        prefix = kind.prefix
        if raw.startswith(prefix) and len(raw) > len(prefix):
            return SyntheticNotificationId(kind=kind, source_id=raw[len(prefix):])
    return PersistedNotificationId(raw)


def is_reserved_notification_id(raw: str) -> bool:
    """Return ``True`` when ``raw`` belongs to the synthetic id space."""

    return isinstance(parse_notification_id(raw), SyntheticNotificationId)


@dataclass
class Notification:
    """Information message shown in a user's notification feed."""

    id: str | None
    recipient_id: str
    sender_id: str
    type: str
    title: str
    message: str
    entity_id: str | None = None
    link_to: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def notification_id(self) -> NotificationId | None:
        if self.id is None:
            return None
        return parse_notification_id(self.id)

    @property
    def is_synthetic(self) -> bool:
        return isinstance(self.notification_id, SyntheticNotificationId)


__all__ = [
    "Notification",
    "NotificationId",
    "PersistedNotificationId",
    "SyntheticNotificationId",
    "SyntheticKind",
    "parse_notification_id",
    "is_reserved_notification_id",
    "NOTIFICATION_TYPE_ACCOUNT_PENDING",
    "NOTIFICATION_TYPE_DELIVERY_COMPLETE",
    "NOTIFICATION_TYPE_PICKUP_COMPLETE",
    "NOTIFICATION_TYPE_EXPIRING_SOON",
    "NOTIFICATION_TYPE_DONATION_EXPIRING",
    "NOTIFICATION_TYPE_VERIFICATION_DECISION",
    "SYSTEM_SENDER_ID",
]
