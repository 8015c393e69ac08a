"""Use case for removing notifications whose triggering action was undone."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from isle.domain.entities import ReactionType
from isle.infrastructure.repositories import NotificationRepository

from .validators import ensure_notification_type, ensure_reaction_type

logger = logging.getLogger(__name__)


def retract_notifications(
    session: Session,
    *,
    kind,
    actor_id: int,
    post_id: int | None = None,
    comment_id: int | None = None,
    reaction_type: ReactionType | str | None = None,
    recipient_id: int | None = None,
) -> int:
    """Delete every notification matching the given filters.

    Only the provided filters narrow the match. Finding nothing is a valid
    outcome and returns ``0``.
    """

    kind = ensure_notification_type(kind)
    reaction = ensure_reaction_type(reaction_type)
    removed = NotificationRepository(session).delete_matching(
        kind,
        actor_id,
        post_id=post_id,
        comment_id=comment_id,
        reaction_type=reaction,
        user_id=recipient_id,
    )
    if removed:
        logger.info("Retracted %s %s notification(s) from user %s", removed, kind.value, actor_id)
    return removed


__all__ = ["retract_notifications"]
