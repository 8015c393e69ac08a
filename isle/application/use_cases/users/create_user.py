"""Use case for registering a community member."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from isle.domain.entities import (
    DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES,
    DEFAULT_DISABLED_NOTIFICATION_TYPES,
    NotificationType,
    Role,
    User,
)
from isle.domain.exceptions import ConflictError
from isle.infrastructure.repositories import UserRepository
from isle.infrastructure.security import get_password_hash
from isle.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: Role = Role.USER,
    avatar: str | None = None,
    disabled_notification_types: Iterable[NotificationType] | None = None,
    disabled_email_notification_types: Iterable[NotificationType] | None = None,
) -> User:
    """Create a user with the default notification preferences unless overridden."""

    repository = UserRepository(session)
    if repository.get_by_username(username) is not None:
        raise ConflictError("Username is already taken")
    if repository.get_by_email(email) is not None:
        raise ConflictError("Email is already registered")

    user = User(
        id=None,
        username=username,
        email=email,
        password=get_password_hash(password),
        role=role,
        avatar=avatar,
        is_active=True,
        created_at=now_in_app_timezone(),
        disabled_notification_types=set(
            DEFAULT_DISABLED_NOTIFICATION_TYPES
            if disabled_notification_types is None
            else disabled_notification_types
        ),
        disabled_email_notification_types=set(
            DEFAULT_DISABLED_EMAIL_NOTIFICATION_TYPES
            if disabled_email_notification_types is None
            else disabled_email_notification_types
        ),
    )
    return repository.create(user)
