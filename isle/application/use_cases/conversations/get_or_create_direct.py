"""Use case that resolves the direct conversation between two users."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from isle.domain.entities import Conversation
from isle.domain.exceptions import InvalidReferenceError, NotFoundError
from isle.infrastructure.repositories import ConversationRepository, UserRepository

logger = logging.getLogger(__name__)


def get_or_create_direct_conversation(
    session: Session, *, user_a: int, user_b: int
) -> Conversation:
    """Return the newest direct conversation of the pair, creating one if needed.

    Earlier conversations between the same users are kept; only the most
    recently created one is returned.
    """

    if user_a == user_b:
        raise InvalidReferenceError(
            "A direct conversation needs two different users", field="user_id"
        )
    users = UserRepository(session)
    for user_id in (user_a, user_b):
        if not users.exists(user_id):
            raise NotFoundError("User", user_id)

    repository = ConversationRepository(session)
    existing = repository.find_direct_between(user_a, user_b)
    if existing is not None:
        return existing

    created = repository.create(Conversation(id=None, channel=False), (user_a, user_b))
    logger.info(
        "Created direct conversation %s between users %s and %s", created.id, user_a, user_b
    )
    return created


__all__ = ["get_or_create_direct_conversation"]
