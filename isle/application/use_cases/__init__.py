"""Aggregate application use cases."""

from .users import create_user, get_user

__all__ = [
    "create_user",
    "get_user",
]
