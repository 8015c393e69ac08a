"""Use case for replacing a user's muted notification kinds."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from isle.domain.entities import NotificationType, User
from isle.domain.exceptions import NotFoundError
from isle.infrastructure.repositories import UserRepository


def update_notification_preferences(
    session: Session,
    *,
    user_id: int,
    disabled_in_app: Iterable[NotificationType] | None = None,
    disabled_email: Iterable[NotificationType] | None = None,
) -> User:
    """Replace either set of muted kinds; ``None`` leaves that set unchanged."""

    repository = UserRepository(session)
    if not repository.exists(user_id):
        raise NotFoundError("User", user_id)
    return repository.replace_preferences(
        user_id,
        disabled_in_app=None if disabled_in_app is None else set(disabled_in_app),
        disabled_email=None if disabled_email is None else set(disabled_email),
    )
