"""
Error envelope for the RPC router.

Every failure leaves the router as
``{"error": {"code": ..., "message": ..., "details": ...}}``.
"""
import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.views import exception_handler

from apps.common.exceptions import DomainError, StorageFailure

logger = logging.getLogger(__name__)


class ProcedureNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "procedure_not_found"

    def __init__(self, name):
        super().__init__(detail=f"No procedure named '{name}'")


def _error_body(exc):
    if isinstance(exc, ValidationError):
        return {
            "code": "invalid_input",
            "message": "Input validation failed.",
            "details": exc.detail,
        }

    detail = exc.detail
    code = getattr(detail, "code", None) or exc.default_code
    if isinstance(detail, (list, dict)):
        return {"code": code, "message": exc.default_detail, "details": detail}

    body = {"code": code, "message": str(detail), "details": None}
    if isinstance(exc, DomainError) and exc.details:
        body["details"] = exc.details
    return body


def rpc_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        logger.exception("Storage failure in procedure %s", getattr(context.get("view"), "procedure_name", "?"))
        exc = StorageFailure()

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, DomainError):
        logger.info("Procedure failed with %s: %s", exc.default_code, exc.detail)

    response.data = {"error": _error_body(exc)}
    return response
