"""Tests for channel conversations."""

from __future__ import annotations

import pytest

from isle.application.use_cases.conversations import (
    create_channel,
    get_conversation,
    get_or_create_direct_conversation,
    join_channel,
    leave_channel,
    list_channels,
    list_conversations,
    send_message,
    unread_count,
)
from isle.domain.exceptions import ForbiddenError, InvalidReferenceError, NotFoundError


def test_create_channel_adds_creator(session, make_user):
    owner = make_user("owner")

    channel = create_channel(
        session, name="  general ", creator_id=owner.id, description="Everything"
    )

    assert channel.channel is True
    assert channel.name == "general"
    assert channel.participant_ids() == {owner.id}
    assert [item.id for item in list_channels(session)] == [channel.id]


def test_channel_name_is_required(session, make_user):
    owner = make_user("owner")

    with pytest.raises(ValueError):
        create_channel(session, name="   ", creator_id=owner.id)
    with pytest.raises(NotFoundError):
        create_channel(session, name="ghosts", creator_id=9999)


def test_join_is_idempotent(session, make_user):
    owner = make_user("owner")
    member = make_user("member")
    channel = create_channel(session, name="general", creator_id=owner.id)

    first = join_channel(session, conversation_id=channel.id, user_id=member.id)
    second = join_channel(session, conversation_id=channel.id, user_id=member.id)

    assert first.id == second.id
    refreshed = get_conversation(session, conversation_id=channel.id, user_id=owner.id)
    assert refreshed.participant_ids() == {owner.id, member.id}


def test_members_share_the_message_log(session, make_user):
    owner = make_user("owner")
    first = make_user("first")
    second = make_user("second")
    channel = create_channel(session, name="general", creator_id=owner.id)
    for user in (first, second):
        join_channel(session, conversation_id=channel.id, user_id=user.id)

    send_message(session, conversation_id=channel.id, sender_id=owner.id, content="welcome")

    assert unread_count(session, conversation_id=channel.id, user_id=first.id) == 1
    assert unread_count(session, conversation_id=channel.id, user_id=second.id) == 1
    assert unread_count(session, conversation_id=channel.id, user_id=owner.id) == 0


def test_leaving_removes_access_to_sending(session, make_user):
    owner = make_user("owner")
    member = make_user("member")
    channel = create_channel(session, name="general", creator_id=owner.id)
    join_channel(session, conversation_id=channel.id, user_id=member.id)

    assert leave_channel(session, conversation_id=channel.id, user_id=member.id) is True
    assert leave_channel(session, conversation_id=channel.id, user_id=member.id) is False
    assert list_conversations(session, user_id=member.id) == []
    with pytest.raises(ForbiddenError):
        send_message(session, conversation_id=channel.id, sender_id=member.id, content="hi")


def test_channels_are_readable_by_non_members(session, make_user):
    owner = make_user("owner")
    visitor = make_user("visitor")
    channel = create_channel(session, name="general", creator_id=owner.id)

    found = get_conversation(session, conversation_id=channel.id, user_id=visitor.id)

    assert found.id == channel.id


def test_direct_conversations_cannot_be_joined(session, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    carol = make_user("carol")
    direct = get_or_create_direct_conversation(session, user_a=alice.id, user_b=bob.id)

    with pytest.raises(InvalidReferenceError):
        join_channel(session, conversation_id=direct.id, user_id=carol.id)
    with pytest.raises(InvalidReferenceError):
        leave_channel(session, conversation_id=direct.id, user_id=alice.id)
    with pytest.raises(NotFoundError):
        join_channel(session, conversation_id=9999, user_id=carol.id)
