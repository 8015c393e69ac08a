"""Use cases for reading conversations and their message log."""

from __future__ import annotations

from sqlalchemy.orm import Session

from isle.config import get_settings
from isle.domain.entities import Conversation, ConversationSummary, Message, Page
from isle.domain.exceptions import NotFoundError
from isle.infrastructure.repositories import ConversationRepository, UserRepository

from .access import load_conversation, require_participant


def list_conversations(session: Session, *, user_id: int) -> list[ConversationSummary]:
    """Return the user's conversations, most recently active first.

    Activity is the last message time, or the creation time for
    conversations without messages.
    """

    if not UserRepository(session).exists(user_id):
        raise NotFoundError("User", user_id)
    repository = ConversationRepository(session)
    unread = repository.unread_counts_for_user(user_id)
    return [
        ConversationSummary(conversation=conversation, unread_count=unread.get(conversation.id, 0))
        for conversation in repository.list_for_user(user_id)
    ]


def get_conversation(session: Session, *, conversation_id: int, user_id: int) -> Conversation:
    """Return a conversation; direct conversations are visible to members only."""

    conversation = load_conversation(ConversationRepository(session), conversation_id)
    if not conversation.channel:
        require_participant(conversation, user_id)
    return conversation


def list_messages(
    session: Session,
    *,
    conversation_id: int,
    user_id: int,
    page: int = 0,
    size: int | None = None,
) -> Page[Message]:
    """Return one page of the message log in chronological order."""

    repository = ConversationRepository(session)
    conversation = load_conversation(repository, conversation_id)
    require_participant(conversation, user_id)
    size = size or get_settings().notification_page_size
    page = max(page, 0)
    items = repository.list_messages(conversation_id, offset=page * size, limit=size)
    return Page(
        items=list(items),
        total=repository.count_messages(conversation_id),
        page=page,
        size=size,
    )


__all__ = ["get_conversation", "list_conversations", "list_messages"]
