"""Map domain errors onto stable HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from isle.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidReferenceError,
    IsleError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[IsleError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidReferenceError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_for(exc: IsleError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


async def handle_isle_error(request: Request, exc: IsleError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "%s %s -> %s %s", request.method, request.url.path, status_code, exc.error_code
    )
    content: dict[str, object] = {"detail": exc.detail, "error_code": exc.error_code}
    if exc.extra:
        content["extra"] = exc.extra
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on ``app``."""

    app.add_exception_handler(IsleError, handle_isle_error)


__all__ = ["STATUS_BY_ERROR", "register_exception_handlers", "status_for"]
