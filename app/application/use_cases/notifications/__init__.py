"""Notification feed and the helpers that emit notifications."""

from .events import (
    create_notification,
    notify_donation_status_changed,
    notify_expiring_donations,
    notify_verification_decision,
)
from .feed import build_feed, feed_channels, mark_read, merge_feed, partition_ids

__all__ = [
    "build_feed",
    "feed_channels",
    "mark_read",
    "merge_feed",
    "partition_ids",
    "create_notification",
    "notify_donation_status_changed",
    "notify_expiring_donations",
    "notify_verification_decision",
]
