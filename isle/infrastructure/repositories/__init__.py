"""Repository implementations for infrastructure layer."""

from .conversation_repository import ConversationRepository
from .notification_repository import NotificationRepository
from .post_repository import PostRepository
from .user_repository import UserRepository

__all__ = [
    "ConversationRepository",
    "NotificationRepository",
    "PostRepository",
    "UserRepository",
]
