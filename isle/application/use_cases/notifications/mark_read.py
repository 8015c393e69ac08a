"""Use cases that toggle the read state of notifications."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from sqlalchemy.orm import Session

from isle.domain.entities import Notification
from isle.domain.exceptions import ForbiddenError, NotFoundError
from isle.infrastructure.repositories import NotificationRepository

from .validators import ensure_notification_type


def mark_notification_read(
    session: Session, *, notification_id: int, recipient_id: int
) -> Notification:
    """Mark one notification as read on behalf of its recipient."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification", notification_id)
    if notification.user_id != recipient_id:
        raise ForbiddenError("Notification belongs to another user")
    if notification.read:
        return notification
    repository.mark_as_read([notification_id], user_id=recipient_id)
    return replace(notification, read=True)


def mark_notifications_read(
    session: Session, *, notification_ids: Iterable[int], recipient_id: int
) -> int:
    """Mark a batch as read; ids owned by other users are ignored."""

    return NotificationRepository(session).mark_as_read(
        notification_ids, user_id=recipient_id
    )


def mark_all_notifications_read(
    session: Session, *, recipient_id: int, excluded_types: Iterable | None = None
) -> int:
    excluded = {ensure_notification_type(kind) for kind in excluded_types or ()}
    return NotificationRepository(session).mark_all_as_read(
        recipient_id, excluded_types=excluded
    )


__all__ = [
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notifications_read",
]
