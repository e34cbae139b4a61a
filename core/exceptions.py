# core/exceptions.py
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Flatten a DRF error detail (str, list or dict) into one readable message."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_message(value)
            if field in ("non_field_errors", "detail"):
                return message
            return f"{field}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render every API error as ``{"error": message}``.

    Field validation errors additionally carry the full DRF structure under
    ``details`` so clients can highlight individual inputs.
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound(str(exc) or None)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied(str(exc) or None)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {str(exc)}",
            exc_info=exc,
        )
        return Response(
            {"error": "Something went wrong!"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    payload = {"error": _first_message(response.data)}
    if isinstance(exc, exceptions.ValidationError) and isinstance(
        response.data, (dict, list)
    ):
        payload["details"] = response.data

    if response.status_code >= 500:
        logger.error(f"API error {response.status_code}: {payload['error']}")
    elif response.status_code in (
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
    ):
        logger.info(f"API access denied ({response.status_code}): {payload['error']}")

    response.data = payload
    return response
