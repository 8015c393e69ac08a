"""Domain entity representing a platform user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .notification import NotificationChannel, NotificationType
from .preferences import (
    DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES,
    DEFAULT_DISABLED_NOTIFICATION_TYPES,
)


class Role(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


@dataclass
class User:
    """Core attributes describing a community member."""

    id: int | None
    username: str
    email: str
    password: str
    role: Role = Role.USER
    avatar: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    disabled_notification_types: set[NotificationType] = field(
        default_factory=lambda: set(DEFAULT_DISABLED_NOTIFICATION_TYPES)
    )
    disabled_email_notification_types: set[NotificationType] = field(
        default_factory=lambda: set(DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES)
    )

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role is Role.ADMIN

    def disabled_types_for(self, channel: NotificationChannel) -> set[NotificationType]:
        """Return the suppressed kinds for ``channel``."""

        if channel is NotificationChannel.EMAIL:
            return self.disabled_email_notification_types
        return self.disabled_notification_types


__all__ = ["Role", "User"]
