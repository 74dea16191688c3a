"""Map domain and framework errors to the uniform error body.

Every failure response has the shape
``{"code", "message", "details"?, "fieldErrors"?: [{"field"?, "message"?}]}``.
"""

import logging
from typing import Any

from django.db import IntegrityError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from events.domain.errors import DomainError, ErrorCode, EventValidationError

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NOTIFICATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_NOTIFICATION_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
}


def error_body(
    code: str,
    message: str,
    details: str | None = None,
    field_errors: list[dict[str, str]] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = details
    if field_errors:
        body["fieldErrors"] = field_errors
    return body


def flatten_field_errors(detail: Any, field: str = "") -> list[dict[str, str]]:
    """Flatten DRF's nested error detail into ``[{field, message}]``."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            errors.extend(flatten_field_errors(value, f"{field}.{key}" if field else str(key)))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(flatten_field_errors(item, field))
        return errors
    entry = {"message": str(detail)}
    if field:
        entry = {"field": field, **entry}
    return [entry]


def exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """DRF exception handler. Unhandled exceptions still propagate as 500s."""
    if isinstance(exc, DomainError):
        set_rollback()
        field_errors = None
        if isinstance(exc, EventValidationError) and exc.field:
            field_errors = [{"field": exc.field, "message": exc.message}]
        return Response(
            error_body(exc.code.value, exc.message, field_errors=field_errors),
            status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
        )

    if isinstance(exc, IntegrityError):
        set_rollback()
        view = context.get("view")
        logger.warning("Integrity error in %s", type(view).__name__, exc_info=exc)
        return Response(
            error_body("CONFLICT", "Request conflicts with the current state of the resource"),
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = error_body(
            ErrorCode.VALIDATION_FAILED.value,
            "Request validation failed",
            field_errors=flatten_field_errors(exc.detail),
        )
    elif isinstance(exc, exceptions.APIException):
        response.data = error_body(exc.default_code.upper(), str(exc.detail))
    return response
