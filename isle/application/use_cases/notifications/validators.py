"""Precondition checks shared by the notification ledger use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from isle.domain.entities import NotificationType, ReactionType
from isle.domain.exceptions import InvalidReferenceError, NotFoundError
from isle.infrastructure.repositories import PostRepository, UserRepository


def ensure_notification_type(kind: object) -> NotificationType:
    """Coerce ``kind`` into a :class:`NotificationType` or reject it."""

    if isinstance(kind, NotificationType):
        return kind
    try:
        return NotificationType(kind)
    except ValueError as exc:
        raise InvalidReferenceError(
            f"Unknown notification kind '{kind}'", field="kind"
        ) from exc


def ensure_reaction_type(reaction: object | None) -> ReactionType | None:
    if reaction is None or isinstance(reaction, ReactionType):
        return reaction
    try:
        return ReactionType(reaction)
    except ValueError as exc:
        raise InvalidReferenceError(
            f"Unknown reaction kind '{reaction}'", field="reaction_type"
        ) from exc


def ensure_kind_combination(
    kind: NotificationType,
    *,
    actor_id: int | None,
    reaction_type: ReactionType | None,
    approved: bool | None,
) -> None:
    """Reject malformed kind/reaction/approval/actor combinations."""

    if kind.requires_reaction and reaction_type is None:
        raise InvalidReferenceError(
            f"{kind.value} notifications require a reaction kind", field="reaction_type"
        )
    if not kind.requires_reaction and reaction_type is not None:
        raise InvalidReferenceError(
            f"{kind.value} notifications cannot carry a reaction kind",
            field="reaction_type",
        )
    if approved is not None and not kind.accepts_approval:
        raise InvalidReferenceError(
            f"{kind.value} notifications cannot carry an approval flag", field="approved"
        )
    if kind.is_toggleable and actor_id is None:
        raise InvalidReferenceError(
            f"{kind.value} notifications require the triggering user", field="actor_id"
        )


def ensure_user_exists(session: Session, user_id: int) -> None:
    if not UserRepository(session).exists(user_id):
        raise NotFoundError("User", user_id)


def ensure_subjects_exist(
    session: Session, *, post_id: int | None, comment_id: int | None
) -> None:
    """Resolve the subject post/comment and check they belong together."""

    posts = PostRepository(session)
    if post_id is not None and posts.get(post_id) is None:
        raise NotFoundError("Post", post_id)
    if comment_id is None:
        return
    comment = posts.get_comment(comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    if post_id is not None and comment.post_id != post_id:
        raise InvalidReferenceError(
            f"Comment {comment_id} does not belong to post {post_id}", field="comment_id"
        )


__all__ = [
    "ensure_kind_combination",
    "ensure_notification_type",
    "ensure_reaction_type",
    "ensure_subjects_exist",
    "ensure_user_exists",
]
