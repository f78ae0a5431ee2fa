"""Mapping from domain errors to HTTP responses.

Installed as DRF's ``EXCEPTION_HANDLER`` so views can let domain errors
propagate. Only validation errors carry field-level detail; server-side
failures answer with a generic message and are logged instead.
"""

from collections.abc import Callable
from typing import TypeVar

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from eventbooking.domain.errors import (
    ConflictError,
    DomainError,
    EventNotFoundError,
    InternalError,
    InvalidEventIdError,
    UploadError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidEventIdError, status.HTTP_400_BAD_REQUEST),
    (EventNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UploadError, status.HTTP_502_BAD_GATEWAY),
    (InternalError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(error: DomainError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: DomainError) -> Response:
    body = {"message": error.message, "code": error.code.value}
    if isinstance(error, ValidationError):
        body["field"] = error.field
        body["reason"] = error.reason
    elif isinstance(error, ConflictError):
        body["kind"] = error.kind
    return Response(body, status=status_for(error))


def api_exception_handler(exc: Exception, context: dict) -> Response:
    if isinstance(exc, DomainError):
        if isinstance(exc, UploadError | InternalError):
            logger.error("request_failed", code=exc.code.value, detail=getattr(exc, "detail", ""))
        return error_response(exc)

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get("detail", response.data) if isinstance(response.data, dict) else response.data
        response.data = {"message": str(detail), "code": getattr(exc, "default_code", "error")}
        return response

    logger.exception("unhandled_error", view=type(context.get("view")).__name__)
    return Response(
        {"message": "Internal server error", "code": "INTERNAL_ERROR"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def retry_once(operation: Callable[[], T]) -> T:
    """Run ``operation``, retrying immediately once on a transient failure.

    Transient means an upload transport failure or an unclassified
    persistence error. Everything else propagates on the first attempt.
    """
    try:
        return operation()
    except (UploadError, InternalError) as exc:
        if isinstance(exc, UploadError) and exc.kind != "transport":
            raise
        logger.warning("retrying_operation", code=exc.code.value)
    return operation()
