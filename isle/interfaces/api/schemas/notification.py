"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from isle.domain.entities import NotificationType, ReactionType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: NotificationType
    user_id: int
    from_user_id: int | None = None
    post_id: int | None = None
    comment_id: int | None = None
    reaction_type: ReactionType | None = None
    content: str | None = None
    approved: bool | None = None
    read: bool
    created_at: datetime


class NotificationPage(BaseModel):
    items: list[NotificationRead]
    total: int
    page: int
    size: int
    has_next: bool


class NotificationCount(BaseModel):
    count: int


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the identifiers without duplicates, preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationMarkReadResult(BaseModel):
    updated: int


__all__ = [
    "NotificationCount",
    "NotificationMarkReadRequest",
    "NotificationMarkReadResult",
    "NotificationPage",
    "NotificationRead",
]
