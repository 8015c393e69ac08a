"""Tests for listing, counting and marking notifications as read."""

from __future__ import annotations

import pytest

from isle.application.use_cases.notifications import (
    count_notifications,
    create_or_toggle_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
)
from isle.domain.entities import NotificationType, ReactionType
from isle.domain.exceptions import ForbiddenError, NotFoundError


@pytest.fixture()
def inbox(session, make_user, make_post, dispatched):
    """An author with three mentions and one reaction, oldest first."""

    author = make_user("author")
    fan = make_user("fan")
    post = make_post(author)
    created = []
    for index in range(3):
        created.append(
            create_or_toggle_notification(
                session,
                kind=NotificationType.MENTION,
                recipient_id=author.id,
                actor_id=fan.id,
                post_id=post.id,
                content=f"mention {index}",
            ).notification
        )
    created.append(
        create_or_toggle_notification(
            session,
            kind=NotificationType.REACTION,
            recipient_id=author.id,
            actor_id=fan.id,
            post_id=post.id,
            reaction_type=ReactionType.LIKE,
        ).notification
    )
    return author, fan, created


def test_list_is_newest_first(session, inbox):
    author, _, created = inbox

    page = list_notifications(session, recipient_id=author.id)

    assert [item.id for item in page.items] == [item.id for item in reversed(created)]
    assert page.total == 4
    assert page.has_next is False


def test_excluded_kinds_are_filtered_before_paging(session, inbox):
    author, _, created = inbox

    first = list_notifications(
        session,
        recipient_id=author.id,
        excluded_types=[NotificationType.REACTION],
        size=2,
    )
    second = list_notifications(
        session,
        recipient_id=author.id,
        excluded_types=[NotificationType.REACTION],
        page=1,
        size=2,
    )

    assert first.total == 3
    assert first.has_next is True
    assert [item.content for item in first.items] == ["mention 2", "mention 1"]
    assert [item.content for item in second.items] == ["mention 0"]
    assert second.has_next is False


def test_counts_follow_read_state(session, inbox):
    author, _, created = inbox

    mark_notification_read(session, notification_id=created[0].id, recipient_id=author.id)

    assert count_notifications(session, recipient_id=author.id) == 4
    assert count_notifications(session, recipient_id=author.id, read=False) == 3
    assert count_notifications(session, recipient_id=author.id, read=True) == 1
    assert (
        count_notifications(
            session,
            recipient_id=author.id,
            read=False,
            excluded_types=[NotificationType.REACTION],
        )
        == 2
    )
    unread = list_notifications(session, recipient_id=author.id, unread_only=True)
    assert created[0].id not in {item.id for item in unread.items}
    assert unread.total == 3


def test_mark_read_is_idempotent(session, inbox):
    author, _, created = inbox

    first = mark_notification_read(
        session, notification_id=created[1].id, recipient_id=author.id
    )
    second = mark_notification_read(
        session, notification_id=created[1].id, recipient_id=author.id
    )

    assert first.read is True
    assert second.read is True


def test_mark_read_checks_ownership(session, inbox):
    author, fan, created = inbox

    with pytest.raises(NotFoundError):
        mark_notification_read(session, notification_id=9999, recipient_id=author.id)
    with pytest.raises(ForbiddenError):
        mark_notification_read(
            session, notification_id=created[0].id, recipient_id=fan.id
        )


def test_batch_mark_ignores_foreign_ids(session, inbox):
    author, fan, created = inbox
    ids = [item.id for item in created[:2]]

    assert mark_notifications_read(session, notification_ids=ids, recipient_id=fan.id) == 0
    assert mark_notifications_read(session, notification_ids=ids, recipient_id=author.id) == 2
    assert mark_notifications_read(session, notification_ids=ids, recipient_id=author.id) == 0


def test_mark_all_respects_exclusions(session, inbox):
    author, _, _ = inbox

    updated = mark_all_notifications_read(
        session, recipient_id=author.id, excluded_types=[NotificationType.REACTION]
    )

    assert updated == 3
    unread = list_notifications(session, recipient_id=author.id, unread_only=True)
    assert [item.type for item in unread.items] == [NotificationType.REACTION]


def test_listing_unknown_user(session):
    with pytest.raises(NotFoundError):
        list_notifications(session, recipient_id=12345)
