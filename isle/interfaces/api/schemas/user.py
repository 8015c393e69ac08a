"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from isle.domain.entities import NotificationType, Role


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)
    avatar: str | None = Field(default=None, max_length=255)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: EmailStr
    avatar: str | None
    role: Role
    is_active: bool
    created_at: datetime | None


class NotificationPreferencesRead(BaseModel):
    disabled_notification_types: list[NotificationType]
    disabled_email_notification_types: list[NotificationType]


class NotificationPreferencesUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    disabled_notification_types: list[NotificationType] | None = None
    disabled_email_notification_types: list[NotificationType] | None = None
