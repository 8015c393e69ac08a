"""Read-only views of posts and comments used to address notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Post:
    id: int | None
    title: str
    content: str
    author_id: int
    created_at: datetime | None = None


@dataclass
class Comment:
    id: int | None
    content: str
    author_id: int
    post_id: int
    parent_id: int | None = None
    created_at: datetime | None = None


__all__ = ["Comment", "Post"]
