"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
)

from isle.domain.entities import NotificationType, ReactionType
from isle.infrastructure.database import Base
from isle.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications.

    ``dedup_key`` is only populated for toggleable kinds; its unique index is
    the backstop that keeps a single active record per (kind, actor, subject).
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_read_created", "user_id", "is_read", "created_at"),
        Index("ix_notifications_type_from_user", "type", "from_user_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    type = Column(Enum(NotificationType, native_enum=False, length=50), nullable=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="SET NULL"), nullable=True)
    comment_id = Column(
        Integer, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True
    )
    from_user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    reaction_type = Column(Enum(ReactionType, native_enum=False, length=32), nullable=True)
    content = Column(String(1000), nullable=True)
    approved = Column(Boolean, nullable=True)
    read = Column("is_read", Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    dedup_key = Column(String(255), nullable=True, unique=True)


__all__ = ["NotificationModel"]
