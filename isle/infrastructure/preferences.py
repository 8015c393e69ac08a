"""Preference Store: which notification kinds a user has switched off."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from isle.domain.entities import NotificationChannel, NotificationType
from isle.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


class PreferenceStore(Protocol):
    """Read-only view over per-user notification preferences."""

    def is_suppressed(
        self, user_id: int, kind: NotificationType, channel: NotificationChannel
    ) -> bool:
        ...


class UserPreferenceStore:
    """Preference store backed by the user's disabled-type tables.

    A failed lookup rolls the session back before re-raising, so the caller
    can keep using the session after failing open.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._users = UserRepository(session)

    def is_suppressed(
        self, user_id: int, kind: NotificationType, channel: NotificationChannel
    ) -> bool:
        try:
            user = self._users.get(user_id)
        except SQLAlchemyError:
            self._session.rollback()
            raise
        if user is None:
            return False
        return kind in user.disabled_types_for(channel)


def is_suppressed(
    store: PreferenceStore,
    user_id: int,
    kind: NotificationType,
    channel: NotificationChannel,
) -> bool:
    """Ask ``store`` whether ``kind`` is muted; lookup failures count as not muted."""

    try:
        return bool(store.is_suppressed(user_id, kind, channel))
    except Exception:  # fail open
        logger.warning(
            "Preference lookup failed for user %s (%s/%s); treating as not suppressed",
            user_id,
            kind.value,
            channel.value,
            exc_info=True,
        )
        return False


__all__ = ["PreferenceStore", "UserPreferenceStore", "is_suppressed"]
