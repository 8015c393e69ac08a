"""Use cases for the per-participant read watermark and unread counts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from isle.domain.entities import Participant
from isle.domain.exceptions import NotFoundError
from isle.infrastructure.repositories import ConversationRepository, UserRepository
from isle.utils import ensure_app_timezone, now_in_app_timezone

from .access import load_conversation, require_participant


def mark_conversation_read(
    session: Session,
    *,
    conversation_id: int,
    user_id: int,
    read_at: datetime | None = None,
) -> Participant:
    """Advance ``user_id``'s watermark to ``read_at`` (default: now).

    The watermark never moves backwards; an older ``read_at`` leaves it as is.
    Timestamps in the future are clamped to now, or to the latest message
    when that one was stamped ahead of the clock.
    """

    repository = ConversationRepository(session)
    conversation = load_conversation(repository, conversation_id)
    require_participant(conversation, user_id)
    ceiling = now_in_app_timezone()
    last_message = conversation.last_message
    if last_message is not None and last_message.created_at is not None:
        ceiling = max(ceiling, last_message.created_at)
    target = ceiling if read_at is None else min(ensure_app_timezone(read_at), ceiling)
    repository.advance_last_read(conversation_id, user_id, target)
    participant = repository.get_participant(conversation_id, user_id)
    if participant is None:  # left concurrently
        raise NotFoundError("Participant", user_id)
    return participant


def unread_count(session: Session, *, conversation_id: int, user_id: int) -> int:
    """Messages from other participants newer than the user's watermark."""

    repository = ConversationRepository(session)
    conversation = load_conversation(repository, conversation_id)
    require_participant(conversation, user_id)
    counts = repository.unread_counts_for_user(user_id, conversation_id=conversation_id)
    return counts.get(conversation_id, 0)


def total_unread_count(session: Session, *, user_id: int) -> int:
    if not UserRepository(session).exists(user_id):
        raise NotFoundError("User", user_id)
    return sum(ConversationRepository(session).unread_counts_for_user(user_id).values())


__all__ = ["mark_conversation_read", "total_unread_count", "unread_count"]
