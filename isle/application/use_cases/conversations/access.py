"""Lookup and membership checks shared by the conversation use cases."""

from __future__ import annotations

from isle.domain.entities import Conversation, Participant
from isle.domain.exceptions import ForbiddenError, NotFoundError
from isle.infrastructure.repositories import ConversationRepository


def load_conversation(repository: ConversationRepository, conversation_id: int) -> Conversation:
    conversation = repository.get(conversation_id)
    if conversation is None:
        raise NotFoundError("Conversation", conversation_id)
    return conversation


def require_participant(conversation: Conversation, user_id: int) -> Participant:
    participant = conversation.participant_for(user_id)
    if participant is None:
        raise ForbiddenError(
            f"User {user_id} is not a participant of conversation {conversation.id}"
        )
    return participant


__all__ = ["load_conversation", "require_participant"]
