"""ORM models used by the application infrastructure."""

from .conversation import ConversationModel, MessageModel, ParticipantModel
from .notification import NotificationModel
from .post import CommentModel, PostModel, post_subscription_table
from .user import (
    UserDisabledEmailNotificationTypeModel,
    UserDisabledNotificationTypeModel,
    UserModel,
)

__all__ = [
    "CommentModel",
    "ConversationModel",
    "MessageModel",
    "NotificationModel",
    "ParticipantModel",
    "PostModel",
    "UserDisabledEmailNotificationTypeModel",
    "UserDisabledNotificationTypeModel",
    "UserModel",
    "post_subscription_table",
]
