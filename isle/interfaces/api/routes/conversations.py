"""Endpoints for direct conversations, channels and their message log."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from isle.application.use_cases.conversations import (
    create_channel as create_channel_uc,
    get_conversation as get_conversation_uc,
    get_or_create_direct_conversation as get_or_create_direct_conversation_uc,
    join_channel as join_channel_uc,
    leave_channel as leave_channel_uc,
    list_channels as list_channels_uc,
    list_conversations as list_conversations_uc,
    list_messages as list_messages_uc,
    mark_conversation_read as mark_conversation_read_uc,
    send_message as send_message_uc,
    total_unread_count as total_unread_count_uc,
    unread_count as unread_count_uc,
)
from isle.domain.entities import ConversationSummary, User
from isle.infrastructure.database import get_db
from isle.interfaces.api.dependencies import get_current_active_user
from isle.interfaces.api.schemas import (
    ChannelCreate,
    ConversationRead,
    ConversationSummaryRead,
    DirectConversationCreate,
    MarkConversationReadRequest,
    MessageCreate,
    MessagePage,
    MessageRead,
    ParticipantRead,
    UnreadCount,
)

router = APIRouter(prefix="/conversations", tags=["conversations"])


def _summary_to_schema(summary: ConversationSummary) -> ConversationSummaryRead:
    conversation = ConversationRead.model_validate(summary.conversation)
    return ConversationSummaryRead(
        **conversation.model_dump(), unread_count=summary.unread_count
    )


@router.get("/", response_model=list[ConversationSummaryRead])
def list_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ConversationSummaryRead]:
    """Return the user's conversations, most recently active first."""

    summaries = list_conversations_uc(db, user_id=current_user.id)
    return [_summary_to_schema(summary) for summary in summaries]


@router.get("/unread-count", response_model=UnreadCount)
def total_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCount:
    return UnreadCount(count=total_unread_count_uc(db, user_id=current_user.id))


@router.post("/direct", response_model=ConversationRead)
def open_direct_conversation(
    payload: DirectConversationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ConversationRead:
    """Return the direct conversation with ``recipient_id``, creating it if needed."""

    conversation = get_or_create_direct_conversation_uc(
        db, user_a=current_user.id, user_b=payload.recipient_id
    )
    return ConversationRead.model_validate(conversation)


@router.post("/channels", response_model=ConversationRead, status_code=status.HTTP_201_CREATED)
def create_channel(
    payload: ChannelCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ConversationRead:
    try:
        channel = create_channel_uc(
            db,
            name=payload.name,
            creator_id=current_user.id,
            description=payload.description,
            avatar=payload.avatar,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ConversationRead.model_validate(channel)


@router.get("/channels", response_model=list[ConversationRead])
def list_channels(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ConversationRead]:
    return [ConversationRead.model_validate(channel) for channel in list_channels_uc(db)]


@router.post("/channels/{conversation_id}/join", response_model=ParticipantRead)
def join_channel(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ParticipantRead:
    participant = join_channel_uc(db, conversation_id=conversation_id, user_id=current_user.id)
    return ParticipantRead.model_validate(participant)


@router.delete(
    "/channels/{conversation_id}/participants/me",
    status_code=status.HTTP_204_NO_CONTENT,
)
def leave_channel(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Leave a channel; leaving a channel you are not in is a no-op."""

    leave_channel_uc(db, conversation_id=conversation_id, user_id=current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{conversation_id}", response_model=ConversationRead)
def get_conversation(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ConversationRead:
    conversation = get_conversation_uc(
        db, conversation_id=conversation_id, user_id=current_user.id
    )
    return ConversationRead.model_validate(conversation)


@router.get("/{conversation_id}/messages", response_model=MessagePage)
def list_messages(
    conversation_id: int,
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessagePage:
    """Return one page of the message log in chronological order."""

    result = list_messages_uc(
        db,
        conversation_id=conversation_id,
        user_id=current_user.id,
        page=page,
        size=size,
    )
    return MessagePage(
        items=[MessageRead.model_validate(message) for message in result.items],
        total=result.total,
        page=result.page,
        size=result.size,
        has_next=result.has_next,
    )


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
)
def send_message(
    conversation_id: int,
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MessageRead:
    """Append a message and move the conversation's last-message pointer."""

    try:
        message = send_message_uc(
            db,
            conversation_id=conversation_id,
            sender_id=current_user.id,
            content=payload.content,
            reply_to_id=payload.reply_to_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return MessageRead.model_validate(message)


@router.post("/{conversation_id}/read", response_model=ParticipantRead)
def mark_conversation_read(
    conversation_id: int,
    payload: MarkConversationReadRequest | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ParticipantRead:
    participant = mark_conversation_read_uc(
        db,
        conversation_id=conversation_id,
        user_id=current_user.id,
        read_at=payload.read_at if payload else None,
    )
    return ParticipantRead.model_validate(participant)


@router.get("/{conversation_id}/unread-count", response_model=UnreadCount)
def unread_count(
    conversation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCount:
    count = unread_count_uc(db, conversation_id=conversation_id, user_id=current_user.id)
    return UnreadCount(count=count)
