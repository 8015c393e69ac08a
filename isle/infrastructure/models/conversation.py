"""SQLAlchemy models for conversations, participants and messages."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from isle.infrastructure.database import Base
from isle.utils import now_in_app_naive_datetime


class ConversationModel(Base):
    """Direct conversation or channel.

    ``last_message_id``/``last_message_at`` form a non-owning pointer that is
    only ever advanced through a conditional update keyed on the timestamp.
    """

    __tablename__ = "message_conversations"

    id = Column(Integer, primary_key=True, index=True)
    channel = Column(Boolean, nullable=False, default=False)
    name = Column(String(120), nullable=True)
    description = Column(Text, nullable=True)
    avatar = Column(String(255), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    last_message_id = Column(
        Integer,
        ForeignKey(
            "messages.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_message_conversations_last_message_id",
        ),
        nullable=True,
    )
    last_message_at = Column(DateTime(), nullable=True)

    participants = relationship(
        "ParticipantModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ParticipantModel.id",
    )
    messages = relationship(
        "MessageModel",
        back_populates="conversation",
        foreign_keys="MessageModel.conversation_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    last_message = relationship(
        "MessageModel",
        foreign_keys=[last_message_id],
        viewonly=True,
        lazy="joined",
    )


class ParticipantModel(Base):
    __tablename__ = "message_participants"
    __table_args__ = (
        UniqueConstraint("conversation_id", "user_id", name="uq_participant_conversation_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(
        Integer,
        ForeignKey("message_conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    last_read_at = Column(DateTime(), nullable=True)

    conversation = relationship("ConversationModel", back_populates="participants")


class MessageModel(Base):
    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_conversation_created", "conversation_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(
        Integer,
        ForeignKey("message_conversations.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    reply_to_id = Column(
        Integer, ForeignKey("messages.id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(DateTime(), nullable=False)

    conversation = relationship(
        "ConversationModel",
        back_populates="messages",
        foreign_keys=[conversation_id],
    )


__all__ = ["ConversationModel", "MessageModel", "ParticipantModel"]
