"""
DRF integration for domain exceptions.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]`` so that views can let
service errors propagate:

    NotFoundError  -> 404 {"success": false, "error": {"code": ..., "message": ...}}
    ConflictError  -> 409
    DomainError    -> 400
"""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import ConflictError, DomainError, NotFoundError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    if not isinstance(exc, DomainError):
        return exception_handler(exc, context)

    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    view = context.get("view")
    logger.info(
        f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: "
        f"{exc.code} {exc.message}"
    )
    return Response({"success": False, "error": exc.to_dict()}, status=status_code)
