"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from isle.domain.entities import User
from isle.domain.exceptions import NotFoundError
from isle.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise :class:`NotFoundError`."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user
