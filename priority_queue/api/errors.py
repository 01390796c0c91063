"""
Mapping of queue errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from priority_queue.errors import (
    InvalidRequestError,
    MemberNotFoundError,
    QueueEmptyError,
    QueueError,
    StoreUnavailableError,
)
from priority_queue.types.api import ErrorResponse

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins
ERROR_STATUS: list[tuple[type[QueueError], int, str]] = [
    (InvalidRequestError, 422, "invalid_request"),
    (QueueEmptyError, status.HTTP_404_NOT_FOUND, "queue_empty"),
    (MemberNotFoundError, status.HTTP_404_NOT_FOUND, "member_not_found"),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "store_unavailable"),
]


def error_status(exc: QueueError) -> tuple[int, str]:
    """
    Resolve the HTTP status code and error code for a queue error.

    Unknown subclasses map to 500.
    """
    for error_cls, status_code, code in ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "queue_error"


async def queue_error_handler(request: Request, exc: QueueError) -> JSONResponse:
    """Render a QueueError as an ErrorResponse."""
    status_code, code = error_status(exc)

    if status_code >= 500:
        logger.warning(
            "Queue request failed",
            extra={"path": request.url.path, "error": code},
        )

    headers = {"Retry-After": "1"} if isinstance(exc, StoreUnavailableError) else None
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=code, detail=str(exc)).model_dump(),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the queue error handler on an application."""
    app.add_exception_handler(QueueError, queue_error_handler)
