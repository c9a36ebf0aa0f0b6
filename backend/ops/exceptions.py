"""
API error taxonomy and the envelope exception handler.

Every failure leaves the API as::

    {"success": false, "message": "...", "error": "<code>"}

Mapping:
- NotAuthenticated / AuthenticationFailed / InvalidToken -> 401
- PermissionDenied                                         -> 403
- NotFound / Http404                                       -> 404
- Conflict, ValidationError                                -> 400
- Throttled                                                -> 429
- anything else                                            -> 500 (logged)
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class Conflict(exceptions.APIException):
    """A uniqueness rule was violated (duplicate SKU, employee code, email)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists."
    default_code = "conflict"


def _flatten(detail, prefix: str = "") -> list[str]:
    """Flatten DRF error detail (dict/list/str) into readable strings."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            label = field if field != "non_field_errors" else ""
            path = f"{prefix}.{label}" if prefix and label else (label or prefix)
            messages.extend(_flatten(value, path))
        return messages
    if isinstance(detail, list):
        messages = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                messages.extend(_flatten(value, f"{prefix}[{index}]"))
            else:
                messages.extend(_flatten(value, prefix))
        return messages
    text = str(detail)
    return [f"{prefix}: {text}" if prefix else text]


def error_body(message: str, code: str) -> dict:
    return {"success": False, "message": message, "error": code}


def envelope_exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER producing the shared failure envelope."""
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or None)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(str(exc) or None)
    elif isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(
            exc.message_dict if hasattr(exc, "error_dict") else exc.messages
        )

    if isinstance(exc, exceptions.APIException):
        headers = {}
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            headers["WWW-Authenticate"] = auth_header
        wait = getattr(exc, "wait", None)
        if wait:
            headers["Retry-After"] = str(int(wait))

        if isinstance(exc, exceptions.ValidationError):
            message = "; ".join(_flatten(exc.detail)) or "Validation failed."
            code = "invalid"
        else:
            detail = exc.detail
            # simplejwt's InvalidToken carries a dict detail with "detail" and "messages"
            if isinstance(detail, dict):
                message = str(detail.get("detail", exc.default_detail))
                code = str(detail.get("code", exc.default_code))
            else:
                message = str(detail)
                code = getattr(detail, "code", None) or exc.default_code

        set_rollback()
        return Response(error_body(message, code), status=exc.status_code, headers=headers)

    view = context.get("view")
    request = context.get("request")
    logger.exception(
        "Unhandled API error",
        extra={
            "view": view.__class__.__name__ if view else None,
            "path": getattr(request, "path", None),
        },
    )
    set_rollback()
    return Response(
        error_body(GENERIC_ERROR_MESSAGE, "server_error"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
