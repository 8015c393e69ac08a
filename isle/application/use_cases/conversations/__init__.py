"""Conversation, message log and unread tracking use cases."""

from .channels import create_channel, join_channel, leave_channel, list_channels
from .get_or_create_direct import get_or_create_direct_conversation
from .list_conversations import get_conversation, list_conversations, list_messages
from .read_state import mark_conversation_read, total_unread_count, unread_count
from .send_message import send_message

__all__ = [
    "create_channel",
    "get_conversation",
    "get_or_create_direct_conversation",
    "join_channel",
    "leave_channel",
    "list_channels",
    "list_conversations",
    "list_messages",
    "mark_conversation_read",
    "send_message",
    "total_unread_count",
    "unread_count",
]
