"""
API exception handler

Renders every failure as ``{"error": ..., "message": ...}``; field
validation errors additionally carry ``details``.
"""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from django.db.models import ProtectedError  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import DeletionBlocked, DomainError, InternalFailure

logger = logging.getLogger(__name__)

ERROR_TITLES = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Access Denied",
    status.HTTP_403_FORBIDDEN: "Access Denied",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: "Unsupported Media Type",
    status.HTTP_429_TOO_MANY_REQUESTS: "Too Many Requests",
}


def _message_from(data) -> str:
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def api_exception_handler(exc, context):
    """DRF ``EXCEPTION_HANDLER`` entry point."""

    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if isinstance(exc, DomainError):
        if exc.status_code >= 500:
            logger.error(f"{view_name}: {exc.title}: {exc.message}", exc_info=exc)
        else:
            logger.warning(f"{view_name}: {exc.title}: {exc.message}")
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, ProtectedError):
        blocked = DeletionBlocked("Resource is referenced by existing bookings")
        logger.warning(f"{view_name}: {blocked.title}: {exc}")
        return Response(blocked.to_dict(), status=blocked.status_code)

    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, DatabaseError):
            logger.error(f"{view_name}: database failure: {exc}", exc_info=exc)
            failure = InternalFailure()
            return Response(failure.to_dict(), status=failure.status_code)
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "error": "Validation Error",
            "message": "Invalid input data",
            "details": response.data,
        }
        return response

    response.data = {
        "error": ERROR_TITLES.get(response.status_code, "Error"),
        "message": _message_from(response.data),
    }
    return response
