"""Use case that records, toggles or suppresses a notification."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from isle.domain.entities import (
    Notification,
    NotificationChannel,
    ReactionType,
    ToggleOutcome,
    ToggleResult,
    build_dedup_key,
)
from isle.infrastructure.notifications import dispatch_notification
from isle.infrastructure.preferences import PreferenceStore, UserPreferenceStore, is_suppressed
from isle.infrastructure.repositories import NotificationRepository
from isle.utils import now_in_app_timezone

from .validators import (
    ensure_kind_combination,
    ensure_notification_type,
    ensure_reaction_type,
    ensure_subjects_exist,
    ensure_user_exists,
)

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Notification], None]


def create_or_toggle_notification(
    session: Session,
    *,
    kind,
    recipient_id: int,
    actor_id: int | None = None,
    post_id: int | None = None,
    comment_id: int | None = None,
    reaction_type: ReactionType | str | None = None,
    content: str | None = None,
    approved: bool | None = None,
    preference_store: PreferenceStore | None = None,
    dispatcher: Dispatcher | None = None,
) -> ToggleResult:
    """Record a notification for ``recipient_id`` about ``kind``.

    Toggleable kinds flip between an active record and no record on every
    call with the same dedup key. Other kinds always append. A kind the
    recipient muted in-app produces no record and reports ``SUPPRESSED``.
    Newly created records are handed to ``dispatcher`` once committed; the
    default dispatcher schedules delivery and returns without waiting for it.
    """

    kind = ensure_notification_type(kind)
    reaction = ensure_reaction_type(reaction_type)
    ensure_kind_combination(kind, actor_id=actor_id, reaction_type=reaction, approved=approved)
    ensure_user_exists(session, recipient_id)
    if actor_id is not None:
        ensure_user_exists(session, actor_id)
    ensure_subjects_exist(session, post_id=post_id, comment_id=comment_id)

    repository = NotificationRepository(session)
    dedup_key = build_dedup_key(
        kind,
        recipient_id=recipient_id,
        actor_id=actor_id,
        post_id=post_id,
        comment_id=comment_id,
        reaction_type=reaction,
    )
    existing = repository.find_by_dedup_key(dedup_key) if dedup_key else None

    store = preference_store or UserPreferenceStore(session)
    if is_suppressed(store, recipient_id, kind, NotificationChannel.IN_APP):
        if existing is not None:
            repository.delete_by_dedup_key(dedup_key)
            logger.info("Retracted muted notification %s (%s)", existing.id, dedup_key)
            return ToggleResult(ToggleOutcome.RETRACTED, existing)
        logger.info(
            "Notification %s suppressed by user %s preferences", kind.value, recipient_id
        )
        return ToggleResult(ToggleOutcome.SUPPRESSED)

    if existing is not None:
        repository.delete_by_dedup_key(dedup_key)
        logger.info("Toggled off notification %s (%s)", existing.id, dedup_key)
        return ToggleResult(ToggleOutcome.RETRACTED, existing)

    notification = Notification(
        id=None,
        type=kind,
        user_id=recipient_id,
        from_user_id=actor_id,
        post_id=post_id,
        comment_id=comment_id,
        reaction_type=reaction,
        content=content,
        approved=approved,
        read=False,
        created_at=now_in_app_timezone(),
    )
    try:
        saved = repository.create(notification)
    except IntegrityError:
        if dedup_key is None or repository.find_by_dedup_key(dedup_key) is None:
            raise
        # A concurrent toggle inserted the same key first: this call turns it off.
        repository.delete_by_dedup_key(dedup_key)
        logger.info("Concurrent toggle on %s resolved as retraction", dedup_key)
        return ToggleResult(ToggleOutcome.RETRACTED)

    (dispatcher or dispatch_notification)(saved)
    return ToggleResult(ToggleOutcome.CREATED, saved)


__all__ = ["create_or_toggle_notification"]
