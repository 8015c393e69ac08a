"""Translate community actions into notification ledger calls.

Handlers resolve who should hear about an action and never notify the user
who performed it.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from isle.domain.entities import NotificationType, ReactionType, ToggleResult
from isle.domain.exceptions import NotFoundError
from isle.infrastructure.repositories import PostRepository

from .create_or_toggle import create_or_toggle_notification
from .retract import retract_notifications

logger = logging.getLogger(__name__)


def _is_self_action(actor_id: int, recipient_id: int) -> bool:
    if actor_id == recipient_id:
        logger.debug("Skipping self notification for user %s", actor_id)
        return True
    return False


def notify_post_reaction(
    session: Session, *, actor_id: int, post_id: int, reaction_type: ReactionType
) -> ToggleResult | None:
    """Toggle the reaction notification for the post author."""

    post = PostRepository(session).get(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    if _is_self_action(actor_id, post.author_id):
        return None
    return create_or_toggle_notification(
        session,
        kind=NotificationType.REACTION,
        recipient_id=post.author_id,
        actor_id=actor_id,
        post_id=post.id,
        reaction_type=reaction_type,
    )


def notify_comment_reaction(
    session: Session, *, actor_id: int, comment_id: int, reaction_type: ReactionType
) -> ToggleResult | None:
    """Toggle the reaction notification for the comment author."""

    comment = PostRepository(session).get_comment(comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    if _is_self_action(actor_id, comment.author_id):
        return None
    return create_or_toggle_notification(
        session,
        kind=NotificationType.REACTION,
        recipient_id=comment.author_id,
        actor_id=actor_id,
        post_id=comment.post_id,
        comment_id=comment.id,
        reaction_type=reaction_type,
    )


def notify_comment_created(session: Session, *, comment_id: int) -> list[ToggleResult]:
    """Notify the replied-to author and the post subscribers about a comment."""

    posts = PostRepository(session)
    comment = posts.get_comment(comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    post = posts.get(comment.post_id)
    if post is None:
        raise NotFoundError("Post", comment.post_id)

    replied_to = post.author_id
    if comment.parent_id is not None:
        parent = posts.get_comment(comment.parent_id)
        if parent is not None:
            replied_to = parent.author_id

    results: list[ToggleResult] = []
    notified = {comment.author_id}
    if replied_to not in notified:
        results.append(
            create_or_toggle_notification(
                session,
                kind=NotificationType.COMMENT_REPLY,
                recipient_id=replied_to,
                actor_id=comment.author_id,
                post_id=post.id,
                comment_id=comment.id,
                content=comment.content[:1000],
            )
        )
        notified.add(replied_to)

    for subscriber_id in posts.list_subscriber_ids(post.id):
        if subscriber_id in notified:
            continue
        notified.add(subscriber_id)
        results.append(
            create_or_toggle_notification(
                session,
                kind=NotificationType.POST_UPDATED,
                recipient_id=subscriber_id,
                actor_id=comment.author_id,
                post_id=post.id,
                comment_id=comment.id,
            )
        )
    return results


def notify_post_subscribed(
    session: Session, *, actor_id: int, post_id: int
) -> ToggleResult | None:
    post = PostRepository(session).get(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    if _is_self_action(actor_id, post.author_id):
        return None
    return create_or_toggle_notification(
        session,
        kind=NotificationType.POST_SUBSCRIBED,
        recipient_id=post.author_id,
        actor_id=actor_id,
        post_id=post.id,
    )


def notify_post_unsubscribed(
    session: Session, *, actor_id: int, post_id: int
) -> ToggleResult | None:
    """Drop the subscription alert and tell the author about the unsubscribe."""

    post = PostRepository(session).get(post_id)
    if post is None:
        raise NotFoundError("Post", post_id)
    if _is_self_action(actor_id, post.author_id):
        return None
    retract_notifications(
        session,
        kind=NotificationType.POST_SUBSCRIBED,
        actor_id=actor_id,
        post_id=post.id,
    )
    return create_or_toggle_notification(
        session,
        kind=NotificationType.POST_UNSUBSCRIBED,
        recipient_id=post.author_id,
        actor_id=actor_id,
        post_id=post.id,
    )


def notify_user_followed(
    session: Session, *, actor_id: int, target_id: int
) -> ToggleResult | None:
    if _is_self_action(actor_id, target_id):
        return None
    return create_or_toggle_notification(
        session,
        kind=NotificationType.USER_FOLLOWED,
        recipient_id=target_id,
        actor_id=actor_id,
    )


def notify_user_unfollowed(
    session: Session, *, actor_id: int, target_id: int
) -> ToggleResult | None:
    if _is_self_action(actor_id, target_id):
        return None
    retract_notifications(
        session,
        kind=NotificationType.USER_FOLLOWED,
        actor_id=actor_id,
        recipient_id=target_id,
    )
    return create_or_toggle_notification(
        session,
        kind=NotificationType.USER_UNFOLLOWED,
        recipient_id=target_id,
        actor_id=actor_id,
    )


def notify_user_mentioned(
    session: Session,
    *,
    actor_id: int,
    target_id: int,
    post_id: int | None = None,
    comment_id: int | None = None,
) -> ToggleResult | None:
    if _is_self_action(actor_id, target_id):
        return None
    return create_or_toggle_notification(
        session,
        kind=NotificationType.MENTION,
        recipient_id=target_id,
        actor_id=actor_id,
        post_id=post_id,
        comment_id=comment_id,
    )


__all__ = [
    "notify_comment_created",
    "notify_comment_reaction",
    "notify_post_reaction",
    "notify_post_subscribed",
    "notify_post_unsubscribed",
    "notify_user_followed",
    "notify_user_mentioned",
    "notify_user_unfollowed",
]
