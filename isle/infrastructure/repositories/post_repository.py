"""Read-mostly lookups for posts, comments and post subscribers."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from isle.domain.entities import Comment, Post
from isle.infrastructure.models import CommentModel, PostModel, post_subscription_table
from isle.utils import ensure_app_timezone


class PostRepository:
    """Resolve posts and comments referenced by notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, post_id: int) -> Post | None:
        model = self.session.get(PostModel, post_id)
        return self._post_to_entity(model) if model else None

    def get_comment(self, comment_id: int) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._comment_to_entity(model) if model else None

    def create(self, post: Post) -> Post:
        model = PostModel(title=post.title, content=post.content, author_id=post.author_id)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._post_to_entity(model)

    def create_comment(self, comment: Comment) -> Comment:
        model = CommentModel(
            content=comment.content,
            author_id=comment.author_id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._comment_to_entity(model)

    def list_subscriber_ids(self, post_id: int) -> list[int]:
        statement = (
            select(post_subscription_table.c.user_id)
            .where(post_subscription_table.c.post_id == post_id)
            .order_by(post_subscription_table.c.user_id)
        )
        return list(self.session.execute(statement).scalars())

    def is_subscribed(self, post_id: int, user_id: int) -> bool:
        statement = select(post_subscription_table.c.user_id).where(
            post_subscription_table.c.post_id == post_id,
            post_subscription_table.c.user_id == user_id,
        )
        return self.session.execute(statement).first() is not None

    def subscribe(self, post_id: int, user_id: int) -> bool:
        """Add the subscription; return ``False`` when it already existed."""

        if self.is_subscribed(post_id, user_id):
            return False
        self.session.execute(
            insert(post_subscription_table).values(post_id=post_id, user_id=user_id)
        )
        self.session.commit()
        return True

    @staticmethod
    def _post_to_entity(model: PostModel) -> Post:
        return Post(
            id=model.id,
            title=model.title,
            content=model.content,
            author_id=model.author_id,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _comment_to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            content=model.content,
            author_id=model.author_id,
            post_id=model.post_id,
            parent_id=model.parent_id,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["PostRepository"]
