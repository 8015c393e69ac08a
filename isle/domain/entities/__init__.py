"""Domain entities exposed by the application."""

from .conversation import Conversation, ConversationSummary, Message, Participant
from .notification import (
    MODERATION_NOTIFICATION_TYPES,
    REACTION_NOTIFICATION_TYPES,
    TOGGLEABLE_NOTIFICATION_TYPES,
    Notification,
    NotificationChannel,
    NotificationType,
    ReactionType,
    ToggleOutcome,
    ToggleResult,
    build_dedup_key,
)
from .page import Page
from .post import Comment, Post
from .preferences import (
    DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES,
    DEFAULT_DISABLED_NOTIFICATION_TYPES,
)
from .user import Role, User

__all__ = [
    "Comment",
    "Conversation",
    "ConversationSummary",
    "DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES",
    "DEFAULT_DISABLED_NOTIFICATION_TYPES",
    "MODERATION_NOTIFICATION_TYPES",
    "Message",
    "Notification",
    "NotificationChannel",
    "NotificationType",
    "Page",
    "Participant",
    "Post",
    "REACTION_NOTIFICATION_TYPES",
    "ReactionType",
    "Role",
    "TOGGLEABLE_NOTIFICATION_TYPES",
    "ToggleOutcome",
    "ToggleResult",
    "User",
    "build_dedup_key",
]
