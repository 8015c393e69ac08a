"""Pydantic schemas exposed by the API layer."""

from .conversation import (
    ChannelCreate,
    ConversationRead,
    ConversationSummaryRead,
    DirectConversationCreate,
    MarkConversationReadRequest,
    MessageCreate,
    MessagePage,
    MessageRead,
    ParticipantRead,
    UnreadCount,
)
from .notification import (
    NotificationCount,
    NotificationMarkReadRequest,
    NotificationMarkReadResult,
    NotificationPage,
    NotificationRead,
)
from .user import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    UserCreate,
    UserRead,
)

__all__ = [
    "ChannelCreate",
    "ConversationRead",
    "ConversationSummaryRead",
    "DirectConversationCreate",
    "MarkConversationReadRequest",
    "MessageCreate",
    "MessagePage",
    "MessageRead",
    "NotificationCount",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResult",
    "NotificationPage",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "ParticipantRead",
    "UnreadCount",
    "UserCreate",
    "UserRead",
]
