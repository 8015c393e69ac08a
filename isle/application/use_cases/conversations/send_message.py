"""Use case for appending a message to a conversation."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from isle.domain.entities import Message
from isle.domain.exceptions import InvalidReferenceError
from isle.infrastructure.repositories import ConversationRepository

from .access import load_conversation, require_participant

logger = logging.getLogger(__name__)


def send_message(
    session: Session,
    *,
    conversation_id: int,
    sender_id: int,
    content: str,
    reply_to_id: int | None = None,
) -> Message:
    """Append a message and move the conversation's last-message pointer.

    The sender's read watermark advances to the new message, so a user's own
    messages never count as unread for them.
    """

    repository = ConversationRepository(session)
    conversation = load_conversation(repository, conversation_id)
    require_participant(conversation, sender_id)

    if not (content or "").strip():
        raise ValueError("Message content is required")

    if reply_to_id is not None:
        target = repository.get_message(reply_to_id)
        if target is None or target.conversation_id != conversation_id:
            raise InvalidReferenceError(
                f"Message {reply_to_id} is not part of conversation {conversation_id}",
                field="reply_to_id",
            )

    message = repository.append_message(
        Message(
            id=None,
            conversation_id=conversation_id,
            sender_id=sender_id,
            content=content,
            reply_to_id=reply_to_id,
        )
    )
    logger.debug(
        "User %s sent message %s to conversation %s", sender_id, message.id, conversation_id
    )
    return message


__all__ = ["send_message"]
