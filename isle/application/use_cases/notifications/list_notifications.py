"""Use cases for listing and counting a user's notifications."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from isle.config import get_settings
from isle.domain.entities import Notification, NotificationType, Page
from isle.infrastructure.repositories import NotificationRepository

from .validators import ensure_notification_type, ensure_user_exists


def _excluded(kinds: Iterable | None) -> set[NotificationType]:
    return {ensure_notification_type(kind) for kind in kinds or ()}


def list_notifications(
    session: Session,
    *,
    recipient_id: int,
    unread_only: bool = False,
    excluded_types: Iterable | None = None,
    page: int = 0,
    size: int | None = None,
) -> Page[Notification]:
    """Return one page of notifications, newest first.

    Excluded kinds are filtered out before the page window is applied.
    """

    ensure_user_exists(session, recipient_id)
    size = size or get_settings().notification_page_size
    page = max(page, 0)
    excluded = _excluded(excluded_types)
    repository = NotificationRepository(session)
    items = repository.list_for_user(
        recipient_id,
        unread_only=unread_only,
        excluded_types=excluded,
        offset=page * size,
        limit=size,
    )
    total = repository.count_for_user(
        recipient_id,
        read=False if unread_only else None,
        excluded_types=excluded,
    )
    return Page(items=list(items), total=total, page=page, size=size)


def count_notifications(
    session: Session,
    *,
    recipient_id: int,
    read: bool | None = None,
    excluded_types: Iterable | None = None,
) -> int:
    """Count notifications with the same filters as :func:`list_notifications`."""

    ensure_user_exists(session, recipient_id)
    return NotificationRepository(session).count_for_user(
        recipient_id, read=read, excluded_types=_excluded(excluded_types)
    )


__all__ = ["count_notifications", "list_notifications"]
