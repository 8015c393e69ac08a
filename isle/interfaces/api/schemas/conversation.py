"""Pydantic models for conversations, channels and messages."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ParticipantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    last_read_at: datetime | None = None


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: int
    sender_id: int
    content: str
    reply_to_id: int | None = None
    created_at: datetime


class ConversationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    channel: bool
    name: str | None = None
    description: str | None = None
    avatar: str | None = None
    created_at: datetime
    last_message: MessageRead | None = None
    participants: list[ParticipantRead] = Field(default_factory=list)


class ConversationSummaryRead(ConversationRead):
    unread_count: int = 0


class DirectConversationCreate(BaseModel):
    recipient_id: int = Field(..., ge=1)


class ChannelCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None
    avatar: str | None = Field(default=None, max_length=255)


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1)
    reply_to_id: int | None = Field(default=None, ge=1)


class MessagePage(BaseModel):
    items: list[MessageRead]
    total: int
    page: int
    size: int
    has_next: bool


class MarkConversationReadRequest(BaseModel):
    read_at: datetime | None = Field(
        default=None, description="Read watermark; defaults to the server time"
    )


class UnreadCount(BaseModel):
    count: int


__all__ = [
    "ChannelCreate",
    "ConversationRead",
    "ConversationSummaryRead",
    "DirectConversationCreate",
    "MarkConversationReadRequest",
    "MessageCreate",
    "MessagePage",
    "MessageRead",
    "ParticipantRead",
    "UnreadCount",
]
