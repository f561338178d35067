"""
Error taxonomy and the DRF exception handler that renders every failure in the
error envelope: {"success": false, "error": ..., "code": ..., "details"?: [...]}.
"""
import logging

from django.db import IntegrityError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    ValidationError,
)
from rest_framework.response import Response

from .validation import flatten_errors

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base for errors raised below the gateway (repositories, storage)."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "server_error"
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class RecordNotFound(PortfolioError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class RecordConflict(PortfolioError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Conflicts with an existing record"


class UpstreamFailure(PortfolioError):
    code = "upstream_failure"
    default_message = "Upstream service failure"


class Unauthorized(NotAuthenticated):
    default_detail = "Unauthorized"
    default_code = "unauthorized"


class InvalidCredentials(AuthenticationFailed):
    default_detail = "Invalid credentials"
    default_code = "invalid_credentials"


def error_payload(message, code, details=None) -> dict:
    payload = {"success": False, "error": str(message), "code": code}
    if details is not None:
        payload["details"] = details
    return payload


def _detail_code(exc: APIException) -> str:
    codes = exc.get_codes()
    if isinstance(codes, str):
        return codes
    return getattr(exc, "default_code", "error")


def custom_exception_handler(exc, context):
    """
    Translate any exception raised inside a view into the error envelope.
    Nothing escapes to the transport layer: unknown exceptions become a logged 500.
    """
    # rest_framework.views resolves DEFAULT_PERMISSION_CLASSES on import, which loads common.permissions
    from rest_framework.views import exception_handler, set_rollback

    if isinstance(exc, PortfolioError):
        set_rollback()
        if exc.status_code >= 500:
            logger.error("%s in %s: %s", exc.__class__.__name__, _view_name(context), exc.message)
            # callers get a generic message; the cause stays in the server log
            return Response(error_payload(exc.default_message, exc.code), status=exc.status_code)
        return Response(error_payload(exc.message, exc.code), status=exc.status_code)

    if isinstance(exc, IntegrityError):
        set_rollback()
        logger.warning("Integrity error in %s: %s", _view_name(context), exc)
        return Response(
            error_payload(RecordConflict.default_message, RecordConflict.code),
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)
    if response is None:
        set_rollback()
        logger.exception("Unhandled error in %s", _view_name(context), exc_info=exc)
        return Response(
            error_payload("Internal server error", "server_error"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = error_payload("Validation error", "validation_error", flatten_errors(exc.detail))
    elif isinstance(exc, Http404):
        response.data = error_payload("Not found", "not_found")
    elif isinstance(exc, APIException):
        response.data = error_payload(str(exc.detail), _detail_code(exc))
    return response


def _view_name(context) -> str:
    view = (context or {}).get("view")
    return view.__class__.__name__ if view is not None else "unknown view"
