"""Shared fixtures: a throwaway SQLite database and small data factories."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from isle.config import get_settings  # noqa: E402

get_settings.cache_clear()

from isle.domain.entities import Comment, Post, User  # noqa: E402
from isle.infrastructure.database import SessionLocal, engine, initialize_database  # noqa: E402
from isle.infrastructure.notifications import notification_dispatcher  # noqa: E402
from isle.infrastructure.repositories import PostRepository, UserRepository  # noqa: E402
from isle.infrastructure.security import get_password_hash  # noqa: E402

TEST_PASSWORD = "Secret123"
# One precomputed hash for every fixture user; pbkdf2 is slow on purpose.
_TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


def _reset_database() -> None:
    engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()
    initialize_database()


@pytest.fixture(autouse=True)
def database():
    """Prepare a fresh database for every test."""

    _reset_database()
    yield
    notification_dispatcher.shutdown()
    engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Factory persisting users with the default notification preferences."""

    counter = {"value": 0}

    def _make_user(username: str | None = None, **overrides) -> User:
        counter["value"] += 1
        name = username or f"user{counter['value']}"
        user = User(
            id=None,
            username=name,
            email=overrides.pop("email", f"{name}@example.com"),
            password=_TEST_PASSWORD_HASH,
            **overrides,
        )
        return UserRepository(session).create(user)

    return _make_user


@pytest.fixture()
def make_post(session):
    def _make_post(author: User, title: str = "A post") -> Post:
        return PostRepository(session).create(
            Post(id=None, title=title, content="Body", author_id=author.id)
        )

    return _make_post


@pytest.fixture()
def make_comment(session):
    def _make_comment(
        author: User, post: Post, *, parent: Comment | None = None, content: str = "Nice"
    ) -> Comment:
        return PostRepository(session).create_comment(
            Comment(
                id=None,
                content=content,
                author_id=author.id,
                post_id=post.id,
                parent_id=parent.id if parent else None,
            )
        )

    return _make_comment


@pytest.fixture()
def dispatched(monkeypatch):
    """Capture notifications handed to the default dispatcher."""

    from isle.application.use_cases.notifications import create_or_toggle

    captured = []
    monkeypatch.setattr(
        create_or_toggle,
        "dispatch_notification",
        lambda notification: captured.append(notification),
    )
    return captured
