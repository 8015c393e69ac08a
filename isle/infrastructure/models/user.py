"""SQLAlchemy models for users and their notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from isle.domain.entities import NotificationType, Role
from isle.infrastructure.database import Base
from isle.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a community member."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(120), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    avatar = Column(String(255), nullable=True)
    role = Column(Enum(Role, native_enum=False, length=16), nullable=False, default=Role.USER)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    disabled_notification_types = relationship(
        "UserDisabledNotificationTypeModel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    disabled_email_notification_types = relationship(
        "UserDisabledEmailNotificationTypeModel",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class UserDisabledNotificationTypeModel(Base):
    """Notification kind a user does not want to see in-app."""

    __tablename__ = "user_disabled_notification_types"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    notification_type = Column(
        Enum(NotificationType, native_enum=False, length=50), primary_key=True
    )


class UserDisabledEmailNotificationTypeModel(Base):
    """Notification kind a user does not want to receive by email."""

    __tablename__ = "user_disabled_email_notification_types"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    notification_type = Column(
        Enum(NotificationType, native_enum=False, length=50), primary_key=True
    )


__all__ = [
    "UserDisabledEmailNotificationTypeModel",
    "UserDisabledNotificationTypeModel",
    "UserModel",
]
