"""Persistence layer for user data and notification preferences."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from isle.domain.entities import NotificationType, Role, User
from isle.infrastructure.models import (
    UserDisabledEmailNotificationTypeModel,
    UserDisabledNotificationTypeModel,
    UserModel,
)
from isle.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide lookups and persistence for :class:`User` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def exists(self, user_id: int) -> bool:
        return (
            self.session.query(UserModel.id).filter(UserModel.id == user_id).first()
            is not None
        )

    def get_by_username(self, username: str) -> User | None:
        model = self.session.query(UserModel).filter_by(username=username).first()
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            username=user.username,
            email=user.email,
            password=user.password,
            avatar=user.avatar,
            role=user.role,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        model.disabled_notification_types = self._in_app_rows(
            user.disabled_notification_types
        )
        model.disabled_email_notification_types = self._email_rows(
            user.disabled_email_notification_types
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def replace_preferences(
        self,
        user_id: int,
        *,
        disabled_in_app: Iterable[NotificationType] | None = None,
        disabled_email: Iterable[NotificationType] | None = None,
    ) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        if disabled_in_app is not None:
            model.disabled_notification_types = self._in_app_rows(disabled_in_app)
        if disabled_email is not None:
            model.disabled_email_notification_types = self._email_rows(disabled_email)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _in_app_rows(
        kinds: Iterable[NotificationType],
    ) -> list[UserDisabledNotificationTypeModel]:
        return [
            UserDisabledNotificationTypeModel(notification_type=kind)
            for kind in sorted(set(kinds), key=lambda item: item.value)
        ]

    @staticmethod
    def _email_rows(
        kinds: Iterable[NotificationType],
    ) -> list[UserDisabledEmailNotificationTypeModel]:
        return [
            UserDisabledEmailNotificationTypeModel(notification_type=kind)
            for kind in sorted(set(kinds), key=lambda item: item.value)
        ]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            role=model.role or Role.USER,
            avatar=model.avatar,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
            disabled_notification_types={
                row.notification_type for row in model.disabled_notification_types
            },
            disabled_email_notification_types={
                row.notification_type for row in model.disabled_email_notification_types
            },
        )


__all__ = ["UserRepository"]
