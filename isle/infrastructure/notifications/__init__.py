"""Delivery helpers for committed notifications."""

from .dispatcher import (
    NOTIFICATION_TITLES,
    NotificationDispatcher,
    dispatch_notification,
    notification_dispatcher,
    notification_title,
)

__all__ = [
    "NOTIFICATION_TITLES",
    "NotificationDispatcher",
    "dispatch_notification",
    "notification_dispatcher",
    "notification_title",
]
