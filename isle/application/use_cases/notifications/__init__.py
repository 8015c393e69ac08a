"""Notification ledger use cases and the event handlers that feed them."""

from .create_or_toggle import create_or_toggle_notification
from .events import (
    notify_comment_created,
    notify_comment_reaction,
    notify_post_reaction,
    notify_post_subscribed,
    notify_post_unsubscribed,
    notify_user_followed,
    notify_user_mentioned,
    notify_user_unfollowed,
)
from .list_notifications import count_notifications, list_notifications
from .mark_read import (
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
)
from .retract import retract_notifications

__all__ = [
    "count_notifications",
    "create_or_toggle_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notifications_read",
    "notify_comment_created",
    "notify_comment_reaction",
    "notify_post_reaction",
    "notify_post_subscribed",
    "notify_post_unsubscribed",
    "notify_user_followed",
    "notify_user_mentioned",
    "notify_user_unfollowed",
    "retract_notifications",
]
