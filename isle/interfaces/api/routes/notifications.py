"""Endpoints exposing the authenticated user's notification ledger."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from isle.application.use_cases.notifications import (
    count_notifications as count_notifications_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read as mark_all_notifications_read_uc,
    mark_notification_read as mark_notification_read_uc,
    mark_notifications_read as mark_notifications_read_uc,
)
from isle.domain.entities import NotificationType, User
from isle.infrastructure.database import get_db
from isle.interfaces.api.dependencies import get_current_active_user
from isle.interfaces.api.schemas import (
    NotificationCount,
    NotificationMarkReadRequest,
    NotificationMarkReadResult,
    NotificationPage,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationPage)
def list_notifications(
    unread_only: bool = False,
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1, le=100),
    exclude: list[NotificationType] = Query(default=[]),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPage:
    """Return one page of notifications, newest first."""

    result = list_notifications_uc(
        db,
        recipient_id=current_user.id,
        unread_only=unread_only,
        excluded_types=exclude,
        page=page,
        size=size,
    )
    return NotificationPage(
        items=[NotificationRead.model_validate(item) for item in result.items],
        total=result.total,
        page=result.page,
        size=result.size,
        has_next=result.has_next,
    )


@router.get("/count", response_model=NotificationCount)
def count_notifications(
    read: bool | None = None,
    exclude: list[NotificationType] = Query(default=[]),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationCount:
    count = count_notifications_uc(
        db, recipient_id=current_user.id, read=read, excluded_types=exclude
    )
    return NotificationCount(count=count)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Mark a single notification as read."""

    notification = mark_notification_read_uc(
        db, notification_id=notification_id, recipient_id=current_user.id
    )
    return NotificationRead.model_validate(notification)


@router.post("/read", response_model=NotificationMarkReadResult)
def mark_notifications_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkReadResult:
    updated = mark_notifications_read_uc(
        db, notification_ids=payload.unique_ids(), recipient_id=current_user.id
    )
    return NotificationMarkReadResult(updated=updated)


@router.post("/read-all", response_model=NotificationMarkReadResult)
def mark_all_notifications_read(
    exclude: list[NotificationType] = Query(default=[]),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkReadResult:
    updated = mark_all_notifications_read_uc(
        db, recipient_id=current_user.id, excluded_types=exclude
    )
    return NotificationMarkReadResult(updated=updated)
