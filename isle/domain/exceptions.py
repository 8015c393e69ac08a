"""Errors raised by the notification and conversation use cases."""

from __future__ import annotations

from typing import Any


class IsleError(Exception):
    """Base class for domain errors with a stable ``error_code``."""

    error_code = "ERROR"

    def __init__(self, detail: str, *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.extra = extra or {}


class NotFoundError(IsleError):
    """A referenced entity id does not resolve."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: object = None) -> None:
        detail = f"{resource} not found"
        if identifier is not None:
            detail = f"{resource} '{identifier}' not found"
        super().__init__(detail, extra={"resource": resource})
        self.resource = resource
        self.identifier = identifier


class ForbiddenError(IsleError):
    """The acting user lacks rights over the target."""

    error_code = "FORBIDDEN"


class InvalidReferenceError(IsleError):
    """A reference points outside its allowed scope or a combination is malformed."""

    error_code = "INVALID_REFERENCE"

    def __init__(self, detail: str, field: str | None = None) -> None:
        super().__init__(detail, extra={"field": field} if field else None)
        self.field = field


class ConflictError(IsleError):
    """A uniqueness constraint was violated."""

    error_code = "CONFLICT"


__all__ = [
    "ConflictError",
    "ForbiddenError",
    "InvalidReferenceError",
    "IsleError",
    "NotFoundError",
]
