"""Persistence layer for conversations, participants and the message log."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from isle.domain.entities import Conversation, Message, Participant
from isle.infrastructure.models import ConversationModel, MessageModel, ParticipantModel
from isle.utils import ensure_app_naive_datetime, ensure_app_timezone, next_timestamp

logger = logging.getLogger(__name__)


class ConversationRepository:
    """Provide persistence for :class:`Conversation` aggregates.

    The repository is the only writer of ``last_message_id``: the pointer is
    advanced by :meth:`append_message` in the same transaction as the message
    insert, and only when the new timestamp is later than the stored one.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, conversation_id: int) -> Conversation | None:
        model = self.session.get(ConversationModel, conversation_id)
        return self._to_entity(model) if model else None

    def find_direct_between(self, user_a: int, user_b: int) -> Conversation | None:
        """Return the newest direct conversation whose members are exactly ``{a, b}``."""

        first = aliased(ParticipantModel)
        second = aliased(ParticipantModel)
        member_count = (
            select(func.count(ParticipantModel.id))
            .where(ParticipantModel.conversation_id == ConversationModel.id)
            .scalar_subquery()
        )
        model = (
            self.session.query(ConversationModel)
            .join(
                first,
                and_(first.conversation_id == ConversationModel.id, first.user_id == user_a),
            )
            .join(
                second,
                and_(second.conversation_id == ConversationModel.id, second.user_id == user_b),
            )
            .filter(ConversationModel.channel.is_(False))
            .filter(member_count == 2)
            .order_by(ConversationModel.created_at.desc(), ConversationModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[Conversation]:
        activity = func.coalesce(
            ConversationModel.last_message_at, ConversationModel.created_at
        )
        query = (
            self.session.query(ConversationModel)
            .join(ParticipantModel, ParticipantModel.conversation_id == ConversationModel.id)
            .filter(ParticipantModel.user_id == user_id)
            .order_by(activity.desc(), ConversationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_channels(self) -> Sequence[Conversation]:
        query = (
            self.session.query(ConversationModel)
            .filter(ConversationModel.channel.is_(True))
            .order_by(ConversationModel.created_at.desc(), ConversationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(
        self, conversation: Conversation, participant_ids: Iterable[int]
    ) -> Conversation:
        model = ConversationModel(
            channel=conversation.channel,
            name=conversation.name,
            description=conversation.description,
            avatar=conversation.avatar,
        )
        if conversation.created_at is not None:
            model.created_at = ensure_app_naive_datetime(conversation.created_at)
        seen: set[int] = set()
        for user_id in participant_ids:
            if user_id in seen:
                continue
            seen.add(user_id)
            model.participants.append(ParticipantModel(user_id=user_id))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_participant(self, conversation_id: int, user_id: int) -> Participant | None:
        model = self._participant_model(conversation_id, user_id)
        return self._participant_to_entity(model) if model else None

    def add_participant(self, conversation_id: int, user_id: int) -> Participant:
        """Add ``user_id`` to the conversation; existing memberships are returned as-is."""

        existing = self._participant_model(conversation_id, user_id)
        if existing is not None:
            return self._participant_to_entity(existing)
        model = ParticipantModel(conversation_id=conversation_id, user_id=user_id)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            # Concurrent join of the same user.
            self.session.rollback()
            existing = self._participant_model(conversation_id, user_id)
            if existing is None:
                raise
            return self._participant_to_entity(existing)
        self.session.refresh(model)
        return self._participant_to_entity(model)

    def remove_participant(self, conversation_id: int, user_id: int) -> bool:
        conversation = self.session.get(ConversationModel, conversation_id)
        if conversation is None:
            return False
        for participant in list(conversation.participants):
            if participant.user_id == user_id:
                conversation.participants.remove(participant)
                self.session.commit()
                return True
        return False

    def get_message(self, message_id: int) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        return self._message_to_entity(model) if model else None

    def list_messages(
        self, conversation_id: int, *, offset: int = 0, limit: int | None = None
    ) -> Sequence[Message]:
        query = (
            self.session.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation_id)
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._message_to_entity(model) for model in query.all()]

    def count_messages(self, conversation_id: int) -> int:
        return (
            self.session.query(MessageModel)
            .filter(MessageModel.conversation_id == conversation_id)
            .count()
        )

    def append_message(self, message: Message) -> Message:
        """Insert ``message`` and advance the conversation pointer atomically.

        The conversation row is locked for the duration of the transaction so
        concurrent sends to the same conversation serialize; the pointer update
        is additionally guarded by a timestamp comparison. The sender's read
        watermark is advanced to the new message in the same commit.
        """

        try:
            current = self.session.execute(
                select(ConversationModel.last_message_at)
                .where(ConversationModel.id == message.conversation_id)
                .with_for_update()
            ).first()
            if current is None:
                msg = f"Conversation with id {message.conversation_id} not found"
                raise ValueError(msg)

            created_at = next_timestamp(current.last_message_at)
            model = MessageModel(
                conversation_id=message.conversation_id,
                sender_id=message.sender_id,
                content=message.content,
                reply_to_id=message.reply_to_id,
                created_at=created_at,
            )
            self.session.add(model)
            self.session.flush()

            moved = self.session.execute(
                update(ConversationModel)
                .where(
                    ConversationModel.id == message.conversation_id,
                    or_(
                        ConversationModel.last_message_at.is_(None),
                        ConversationModel.last_message_at < created_at,
                    ),
                )
                .values(last_message_id=model.id, last_message_at=created_at)
                .execution_options(synchronize_session=False)
            ).rowcount
            if not moved:
                logger.info(
                    "Conversation %s already points at a newer message than %s",
                    message.conversation_id,
                    model.id,
                )
            self._advance_watermark(message.conversation_id, message.sender_id, created_at)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(model)
        return self._message_to_entity(model)

    def advance_last_read(
        self, conversation_id: int, user_id: int, read_at: datetime
    ) -> int:
        """Move the watermark forward to ``read_at``; earlier values are ignored."""

        updated = self._advance_watermark(
            conversation_id, user_id, ensure_app_naive_datetime(read_at)
        )
        self.session.commit()
        return updated

    def unread_counts_for_user(
        self, user_id: int, *, conversation_id: int | None = None
    ) -> dict[int, int]:
        """Return unread message counts keyed by conversation for ``user_id``.

        A message is unread when another participant sent it after the user's
        ``last_read_at``; an unset watermark makes every such message unread.
        """

        statement = (
            select(MessageModel.conversation_id, func.count(MessageModel.id))
            .join(
                ParticipantModel,
                and_(
                    ParticipantModel.conversation_id == MessageModel.conversation_id,
                    ParticipantModel.user_id == user_id,
                ),
            )
            .where(MessageModel.sender_id != user_id)
            .where(
                or_(
                    ParticipantModel.last_read_at.is_(None),
                    MessageModel.created_at > ParticipantModel.last_read_at,
                )
            )
            .group_by(MessageModel.conversation_id)
        )
        if conversation_id is not None:
            statement = statement.where(MessageModel.conversation_id == conversation_id)
        return {
            row_conversation_id: int(count)
            for row_conversation_id, count in self.session.execute(statement).all()
        }

    def _advance_watermark(
        self, conversation_id: int, user_id: int, read_at: datetime
    ) -> int:
        return self.session.execute(
            update(ParticipantModel)
            .where(
                ParticipantModel.conversation_id == conversation_id,
                ParticipantModel.user_id == user_id,
                or_(
                    ParticipantModel.last_read_at.is_(None),
                    ParticipantModel.last_read_at < read_at,
                ),
            )
            .values(last_read_at=read_at)
            .execution_options(synchronize_session=False)
        ).rowcount

    def _participant_model(
        self, conversation_id: int, user_id: int
    ) -> ParticipantModel | None:
        return (
            self.session.query(ParticipantModel)
            .filter(
                ParticipantModel.conversation_id == conversation_id,
                ParticipantModel.user_id == user_id,
            )
            .first()
        )

    @classmethod
    def _to_entity(cls, model: ConversationModel) -> Conversation:
        return Conversation(
            id=model.id,
            channel=bool(model.channel),
            name=model.name,
            description=model.description,
            avatar=model.avatar,
            created_at=ensure_app_timezone(model.created_at),
            last_message=(
                cls._message_to_entity(model.last_message)
                if model.last_message is not None
                else None
            ),
            participants=[
                cls._participant_to_entity(participant)
                for participant in model.participants
            ],
        )

    @staticmethod
    def _participant_to_entity(model: ParticipantModel) -> Participant:
        return Participant(
            id=model.id,
            conversation_id=model.conversation_id,
            user_id=model.user_id,
            last_read_at=ensure_app_timezone(model.last_read_at),
        )

    @staticmethod
    def _message_to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            conversation_id=model.conversation_id,
            sender_id=model.sender_id,
            content=model.content,
            reply_to_id=model.reply_to_id,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ConversationRepository"]
