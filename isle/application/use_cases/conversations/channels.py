"""Use cases for channel conversations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from isle.domain.entities import Conversation, Participant
from isle.domain.exceptions import InvalidReferenceError, NotFoundError
from isle.infrastructure.repositories import ConversationRepository, UserRepository

from .access import load_conversation

logger = logging.getLogger(__name__)


def create_channel(
    session: Session,
    *,
    name: str,
    creator_id: int,
    description: str | None = None,
    avatar: str | None = None,
) -> Conversation:
    """Create a channel whose first participant is ``creator_id``."""

    clean_name = (name or "").strip()
    if not clean_name:
        raise ValueError("Channel name is required")
    if not UserRepository(session).exists(creator_id):
        raise NotFoundError("User", creator_id)

    channel = ConversationRepository(session).create(
        Conversation(
            id=None,
            channel=True,
            name=clean_name,
            description=description,
            avatar=avatar,
        ),
        (creator_id,),
    )
    logger.info("User %s created channel %s (%s)", creator_id, channel.id, clean_name)
    return channel


def list_channels(session: Session) -> Sequence[Conversation]:
    return ConversationRepository(session).list_channels()


def _load_channel(repository: ConversationRepository, conversation_id: int) -> Conversation:
    conversation = load_conversation(repository, conversation_id)
    if not conversation.channel:
        raise InvalidReferenceError(
            f"Conversation {conversation_id} is not a channel", field="conversation_id"
        )
    return conversation


def join_channel(session: Session, *, conversation_id: int, user_id: int) -> Participant:
    """Add ``user_id`` to a channel; joining twice keeps the first membership."""

    if not UserRepository(session).exists(user_id):
        raise NotFoundError("User", user_id)
    repository = ConversationRepository(session)
    _load_channel(repository, conversation_id)
    return repository.add_participant(conversation_id, user_id)


def leave_channel(session: Session, *, conversation_id: int, user_id: int) -> bool:
    """Remove ``user_id`` from a channel; returns ``False`` if not a member."""

    repository = ConversationRepository(session)
    _load_channel(repository, conversation_id)
    return repository.remove_participant(conversation_id, user_id)


__all__ = ["create_channel", "join_channel", "leave_channel", "list_channels"]
