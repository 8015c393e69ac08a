"""Use cases for managing users."""

from .create_user import create_user
from .get_user import get_user
from .update_notification_preferences import update_notification_preferences

__all__ = [
    "create_user",
    "get_user",
    "update_notification_preferences",
]
