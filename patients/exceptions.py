"""
Error types raised by the patient services and the API exception handler
that renders them.

Every failure leaves the API in the same envelope::

    {"ok": false, "error": {"code": "...", "message": ...}}
"""
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


class PatientError(Exception):
    """Base class for errors raised by the patient services."""
    code = "patient_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: Any = None):
        self.message = message if message is not None else self.code
        super().__init__(self.message)


class ValidationError(PatientError):
    """One or more fields fail their constraint.

    ``errors`` maps each offending field to a list of messages.
    """
    code = "validation_error"

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        super().__init__(errors)


class ConflictError(PatientError):
    """Another patient already has the same name and birth year."""
    code = "conflict"


class NotFoundError(PatientError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class MigrationError(PatientError):
    """The schema could not be brought to the current version."""
    code = "migration_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error(code: str, message: Any, status_code: int) -> Response:
    return Response({'ok': False, 'error': {'code': code, 'message': message}}, status=status_code)


def api_exception_handler(exc, context):
    if isinstance(exc, PatientError):
        return _error(exc.code, exc.message, exc.status_code)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        return _error('server_error', str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = str(resp.data)
    return _error('api_error', detail, resp.status_code)
