"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from isle.domain.entities import (
    Notification,
    NotificationType,
    ReactionType,
    build_dedup_key,
)
from isle.infrastructure.models import NotificationModel
from isle.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide ledger operations for :class:`Notification` objects.

    Every mutating method commits on success; the only write that may fail on
    purpose is :meth:`create`, which re-raises ``IntegrityError`` after rolling
    back when the dedup key is already taken.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def find_by_dedup_key(self, dedup_key: str) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.dedup_key == dedup_key)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        excluded_types: Collection[NotificationType] = (),
        offset: int = 0,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self._filtered(
            user_id, read=False if unread_only else None, excluded_types=excluded_types
        )
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_for_user(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        excluded_types: Collection[NotificationType] = (),
    ) -> int:
        return self._filtered(user_id, read=read, excluded_types=excluded_types).count()

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            type=notification.type,
            user_id=notification.user_id,
            post_id=notification.post_id,
            comment_id=notification.comment_id,
            from_user_id=notification.from_user_id,
            reaction_type=notification.reaction_type,
            content=notification.content,
            approved=notification.approved,
            read=notification.read,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
            dedup_key=build_dedup_key(
                notification.type,
                recipient_id=notification.user_id,
                actor_id=notification.from_user_id,
                post_id=notification.post_id,
                comment_id=notification.comment_id,
                reaction_type=notification.reaction_type,
            ),
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def delete_by_dedup_key(self, dedup_key: str) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.dedup_key == dedup_key)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_matching(
        self,
        notification_type: NotificationType,
        from_user_id: int,
        *,
        post_id: int | None = None,
        comment_id: int | None = None,
        reaction_type: ReactionType | None = None,
        user_id: int | None = None,
    ) -> int:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.type == notification_type,
            NotificationModel.from_user_id == from_user_id,
        )
        if user_id is not None:
            query = query.filter(NotificationModel.user_id == user_id)
        if post_id is not None:
            query = query.filter(NotificationModel.post_id == post_id)
        if comment_id is not None:
            query = query.filter(NotificationModel.comment_id == comment_id)
        if reaction_type is not None:
            query = query.filter(NotificationModel.reaction_type == reaction_type)
        deleted = query.delete(synchronize_session=False)
        self.session.commit()
        return deleted

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(
        self,
        user_id: int,
        *,
        excluded_types: Collection[NotificationType] = (),
    ) -> int:
        updated = self._filtered(
            user_id, read=False, excluded_types=excluded_types
        ).update({NotificationModel.read: True}, synchronize_session=False)
        self.session.commit()
        return updated

    def _filtered(
        self,
        user_id: int,
        *,
        read: bool | None,
        excluded_types: Collection[NotificationType],
    ) -> Query:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if read is not None:
            query = query.filter(NotificationModel.read.is_(read))
        if excluded_types:
            query = query.filter(NotificationModel.type.not_in(list(excluded_types)))
        return query

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            type=model.type,
            user_id=model.user_id,
            from_user_id=model.from_user_id,
            post_id=model.post_id,
            comment_id=model.comment_id,
            reaction_type=model.reaction_type,
            content=model.content,
            approved=model.approved,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
