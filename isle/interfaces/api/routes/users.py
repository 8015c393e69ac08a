"""Routes for registering users and managing their notification preferences."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from isle.application.use_cases.users import (
    create_user as create_user_uc,
    update_notification_preferences as update_notification_preferences_uc,
)
from isle.domain.entities import User
from isle.infrastructure.database import get_db
from isle.interfaces.api.dependencies import get_current_active_user
from isle.interfaces.api.schemas import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
    UserCreate,
    UserRead,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


def _preferences_of(user: User) -> NotificationPreferencesRead:
    return NotificationPreferencesRead(
        disabled_notification_types=sorted(
            user.disabled_notification_types, key=lambda kind: kind.value
        ),
        disabled_email_notification_types=sorted(
            user.disabled_email_notification_types, key=lambda kind: kind.value
        ),
    )


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    """Create a user with the default notification preferences."""

    try:
        user = create_user_uc(
            db,
            username=user_in.username,
            email=user_in.email,
            password=user_in.password,
            avatar=user_in.avatar,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Registered user %s", user.id)
    return _to_read_model(user)


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Return the authenticated user."""

    return _to_read_model(current_user)


@router.get("/me/notification-preferences", response_model=NotificationPreferencesRead)
def read_notification_preferences(current_user: User = Depends(get_current_active_user)):
    return _preferences_of(current_user)


@router.put("/me/notification-preferences", response_model=NotificationPreferencesRead)
def update_notification_preferences(
    preferences_in: NotificationPreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Replace the kinds muted in-app and by email for the authenticated user."""

    user = update_notification_preferences_uc(
        db,
        user_id=current_user.id,
        disabled_in_app=preferences_in.disabled_notification_types,
        disabled_email=preferences_in.disabled_email_notification_types,
    )
    return _preferences_of(user)
