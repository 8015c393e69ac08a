"""Tests for direct conversations, sending messages and unread tracking."""

from __future__ import annotations

from datetime import timedelta

import pytest

from isle.application.use_cases.conversations import (
    get_conversation,
    get_or_create_direct_conversation,
    list_conversations,
    list_messages,
    mark_conversation_read,
    send_message,
    total_unread_count,
    unread_count,
)
from isle.domain.entities import Conversation
from isle.domain.exceptions import ForbiddenError, InvalidReferenceError, NotFoundError
from isle.infrastructure.repositories import ConversationRepository
from isle.utils import datetime as app_datetime
from isle.utils import now_in_app_timezone


@pytest.fixture()
def pair(make_user):
    return make_user("alice"), make_user("bob")


@pytest.fixture()
def direct(session, pair):
    alice, bob = pair
    return get_or_create_direct_conversation(session, user_a=alice.id, user_b=bob.id)


def test_direct_conversation_is_reused_in_either_order(session, pair, direct):
    alice, bob = pair

    again = get_or_create_direct_conversation(session, user_a=bob.id, user_b=alice.id)

    assert again.id == direct.id
    assert direct.channel is False
    assert direct.participant_ids() == {alice.id, bob.id}


def test_most_recent_direct_conversation_wins(session, pair, direct):
    alice, bob = pair
    newer = ConversationRepository(session).create(
        Conversation(
            id=None,
            channel=False,
            created_at=direct.created_at + timedelta(minutes=5),
        ),
        (alice.id, bob.id),
    )

    found = get_or_create_direct_conversation(session, user_a=alice.id, user_b=bob.id)

    assert found.id == newer.id


def test_direct_conversation_requires_two_existing_users(session, pair):
    alice, _ = pair

    with pytest.raises(InvalidReferenceError):
        get_or_create_direct_conversation(session, user_a=alice.id, user_b=alice.id)
    with pytest.raises(NotFoundError):
        get_or_create_direct_conversation(session, user_a=alice.id, user_b=4242)


def test_two_party_read_scenario(session, pair, direct):
    alice, bob = pair

    first = send_message(
        session, conversation_id=direct.id, sender_id=alice.id, content="hi"
    )
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 1
    assert unread_count(session, conversation_id=direct.id, user_id=alice.id) == 0

    mark_conversation_read(session, conversation_id=direct.id, user_id=bob.id)
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 0

    second = send_message(
        session, conversation_id=direct.id, sender_id=alice.id, content="still there?"
    )
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 1

    conversation = get_conversation(session, conversation_id=direct.id, user_id=bob.id)
    assert conversation.last_message.id == second.id
    assert second.created_at > first.created_at


def test_message_timestamps_strictly_increase(session, pair, direct):
    alice, bob = pair

    messages = [
        send_message(
            session,
            conversation_id=direct.id,
            sender_id=alice.id if index % 2 else bob.id,
            content=f"message {index}",
        )
        for index in range(6)
    ]

    stamps = [message.created_at for message in messages]
    assert stamps == sorted(stamps)
    assert len(set(stamps)) == len(stamps)
    conversation = get_conversation(session, conversation_id=direct.id, user_id=alice.id)
    assert conversation.last_message.id == messages[-1].id
    assert conversation.last_activity_at == messages[-1].created_at


def test_sender_watermark_moves_with_their_message(session, pair, direct):
    alice, bob = pair
    send_message(session, conversation_id=direct.id, sender_id=bob.id, content="ping")
    assert unread_count(session, conversation_id=direct.id, user_id=alice.id) == 1

    reply = send_message(session, conversation_id=direct.id, sender_id=alice.id, content="pong")

    assert unread_count(session, conversation_id=direct.id, user_id=alice.id) == 0
    participant = ConversationRepository(session).get_participant(direct.id, alice.id)
    assert participant.last_read_at == reply.created_at


def test_read_watermark_never_moves_backwards(session, pair, direct):
    alice, bob = pair
    older = send_message(session, conversation_id=direct.id, sender_id=alice.id, content="one")
    newer = send_message(session, conversation_id=direct.id, sender_id=alice.id, content="two")

    mark_conversation_read(
        session, conversation_id=direct.id, user_id=bob.id, read_at=newer.created_at
    )
    participant = mark_conversation_read(
        session, conversation_id=direct.id, user_id=bob.id, read_at=older.created_at
    )

    assert participant.last_read_at == newer.created_at
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 0


def test_partial_read_leaves_newer_messages_unread(session, pair, direct):
    alice, bob = pair
    first = send_message(session, conversation_id=direct.id, sender_id=alice.id, content="one")
    send_message(session, conversation_id=direct.id, sender_id=alice.id, content="two")

    mark_conversation_read(
        session, conversation_id=direct.id, user_id=bob.id, read_at=first.created_at
    )

    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 1


def test_future_read_time_is_clamped(session, pair, direct):
    _, bob = pair
    future = now_in_app_timezone() + timedelta(days=1)

    participant = mark_conversation_read(
        session, conversation_id=direct.id, user_id=bob.id, read_at=future
    )

    assert participant.last_read_at <= now_in_app_timezone()


def test_mark_read_covers_messages_stamped_ahead_of_the_clock(
    session, pair, direct, monkeypatch
):
    alice, bob = pair
    real_now = app_datetime.now_in_app_naive_datetime
    monkeypatch.setattr(
        app_datetime, "now_in_app_naive_datetime", lambda: real_now() + timedelta(hours=1)
    )
    send_message(session, conversation_id=direct.id, sender_id=alice.id, content="early")
    monkeypatch.setattr(app_datetime, "now_in_app_naive_datetime", real_now)
    latest = send_message(
        session, conversation_id=direct.id, sender_id=alice.id, content="after step back"
    )
    assert latest.created_at > now_in_app_timezone()

    participant = mark_conversation_read(session, conversation_id=direct.id, user_id=bob.id)

    assert participant.last_read_at == latest.created_at
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 0

    send_message(session, conversation_id=direct.id, sender_id=alice.id, content="next")
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 1


def test_explicit_read_time_may_reach_a_message_ahead_of_the_clock(
    session, pair, direct, monkeypatch
):
    alice, bob = pair
    real_now = app_datetime.now_in_app_naive_datetime
    monkeypatch.setattr(
        app_datetime, "now_in_app_naive_datetime", lambda: real_now() + timedelta(hours=1)
    )
    ahead = send_message(session, conversation_id=direct.id, sender_id=alice.id, content="hi")
    monkeypatch.setattr(app_datetime, "now_in_app_naive_datetime", real_now)

    participant = mark_conversation_read(
        session,
        conversation_id=direct.id,
        user_id=bob.id,
        read_at=ahead.created_at + timedelta(days=1),
    )

    assert participant.last_read_at == ahead.created_at
    assert unread_count(session, conversation_id=direct.id, user_id=bob.id) == 0


def test_send_rejects_invalid_input(session, pair, direct, make_user):
    alice, bob = pair
    outsider = make_user("mallory")

    with pytest.raises(ForbiddenError):
        send_message(session, conversation_id=direct.id, sender_id=outsider.id, content="hey")
    with pytest.raises(ValueError):
        send_message(session, conversation_id=direct.id, sender_id=alice.id, content="   ")
    with pytest.raises(NotFoundError):
        send_message(session, conversation_id=9999, sender_id=alice.id, content="hey")

    elsewhere = get_or_create_direct_conversation(
        session, user_a=bob.id, user_b=outsider.id
    )
    foreign = send_message(
        session, conversation_id=elsewhere.id, sender_id=bob.id, content="hello"
    )
    with pytest.raises(InvalidReferenceError):
        send_message(
            session,
            conversation_id=direct.id,
            sender_id=alice.id,
            content="reply",
            reply_to_id=foreign.id,
        )


def test_replies_reference_messages_in_the_same_conversation(session, pair, direct):
    alice, bob = pair
    question = send_message(session, conversation_id=direct.id, sender_id=alice.id, content="?")

    answer = send_message(
        session,
        conversation_id=direct.id,
        sender_id=bob.id,
        content="!",
        reply_to_id=question.id,
    )

    assert answer.reply_to_id == question.id


def test_conversations_are_listed_by_latest_activity(session, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    with_bob = get_or_create_direct_conversation(session, user_a=alice.id, user_b=bob.id)
    with_carol = get_or_create_direct_conversation(session, user_a=alice.id, user_b=carol.id)

    before = [summary.conversation.id for summary in list_conversations(session, user_id=alice.id)]
    assert before == [with_carol.id, with_bob.id]

    send_message(session, conversation_id=with_bob.id, sender_id=bob.id, content="news")

    summaries = list_conversations(session, user_id=alice.id)
    assert [summary.conversation.id for summary in summaries] == [with_bob.id, with_carol.id]
    assert [summary.unread_count for summary in summaries] == [1, 0]


def test_total_unread_matches_per_conversation_counts(session, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    with_bob = get_or_create_direct_conversation(session, user_a=alice.id, user_b=bob.id)
    with_carol = get_or_create_direct_conversation(session, user_a=alice.id, user_b=carol.id)
    send_message(session, conversation_id=with_bob.id, sender_id=bob.id, content="1")
    send_message(session, conversation_id=with_bob.id, sender_id=bob.id, content="2")
    send_message(session, conversation_id=with_carol.id, sender_id=carol.id, content="3")

    per_conversation = sum(
        unread_count(session, conversation_id=conversation.id, user_id=alice.id)
        for conversation in (with_bob, with_carol)
    )

    assert per_conversation == 3
    assert total_unread_count(session, user_id=alice.id) == 3


def test_messages_are_paged_chronologically(session, pair, direct):
    alice, bob = pair
    for index in range(5):
        send_message(
            session, conversation_id=direct.id, sender_id=alice.id, content=f"m{index}"
        )

    first = list_messages(session, conversation_id=direct.id, user_id=bob.id, size=3)
    second = list_messages(session, conversation_id=direct.id, user_id=bob.id, page=1, size=3)

    assert [message.content for message in first.items] == ["m0", "m1", "m2"]
    assert [message.content for message in second.items] == ["m3", "m4"]
    assert first.total == 5
    assert first.has_next is True


def test_direct_conversations_are_private(session, direct, make_user):
    outsider = make_user("mallory")

    with pytest.raises(ForbiddenError):
        get_conversation(session, conversation_id=direct.id, user_id=outsider.id)
    with pytest.raises(ForbiddenError):
        unread_count(session, conversation_id=direct.id, user_id=outsider.id)
    with pytest.raises(ForbiddenError):
        mark_conversation_read(session, conversation_id=direct.id, user_id=outsider.id)
