"""Domain entities for conversations, channels and their message log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Participant:
    """Membership of ``user_id`` in a conversation with its read watermark."""

    id: int | None
    conversation_id: int
    user_id: int
    last_read_at: datetime | None = None


@dataclass
class Message:
    """Append-only entry of a conversation's message log."""

    id: int | None
    conversation_id: int
    sender_id: int
    content: str
    reply_to_id: int | None = None
    created_at: datetime | None = None


@dataclass
class Conversation:
    """Direct conversation between two users or a named channel.

    ``last_message`` is a display pointer only; the conversation does not own
    it through that reference.
    """

    id: int | None
    channel: bool = False
    name: str | None = None
    description: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None
    last_message: Message | None = None
    participants: list[Participant] = field(default_factory=list)

    @property
    def last_activity_at(self) -> datetime | None:
        """Sort key used by conversation listings."""

        if self.last_message is not None and self.last_message.created_at is not None:
            return self.last_message.created_at
        return self.created_at

    def participant_ids(self) -> set[int]:
        return {participant.user_id for participant in self.participants}

    def participant_for(self, user_id: int) -> Participant | None:
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None


@dataclass
class ConversationSummary:
    """Conversation as listed for one user, with that user's unread count."""

    conversation: Conversation
    unread_count: int


__all__ = ["Conversation", "ConversationSummary", "Message", "Participant"]
