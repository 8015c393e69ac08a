"""Default notification preferences applied to newly registered users."""

from __future__ import annotations

from .notification import NotificationType

#: Passive, high-volume kinds that new users do not see in-app unless they opt in.
DEFAULT_DISABLED_NOTIFICATION_TYPES: frozenset[NotificationType] = frozenset(
    {NotificationType.POST_VIEWED, NotificationType.USER_ACTIVITY}
)

DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES: frozenset[NotificationType] = frozenset()


__all__ = [
    "DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES",
    "DEFAULT_DISABLED_NOTIFICATION_TYPES",
]
