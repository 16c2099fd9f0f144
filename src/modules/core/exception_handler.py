"""Project-wide DRF exception handler.

Renders every error that escapes a view into the response envelope:

- DRF exceptions (parse errors, validation errors, 404/405) keep their
  status code; their details are flattened into ``errors``.
- Any other exception is logged with its traceback and answered with a
  500 envelope.  Nothing is retried here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.envelope import ApiResponse

logger = structlog.get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."
VALIDATION_FAILED_MESSAGE = "Validation failed."


def envelope_exception_handler(
    exc: Exception, context: Dict[str, Any]
) -> Optional[Response]:
    response = drf_exception_handler(exc, context)
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else None

    if response is None:
        logger.exception(
            "request.unhandled_error",
            view=view_name,
            error_type=type(exc).__name__,
        )
        envelope = ApiResponse.error_result(UNEXPECTED_ERROR_MESSAGE)
        return Response(
            envelope.to_payload(),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    errors = flatten_errors(response.data)
    if isinstance(exc, ValidationError):
        message = VALIDATION_FAILED_MESSAGE
    else:
        message = errors[0] if errors else str(exc)

    logger.warning(
        "request.rejected",
        view=view_name,
        status_code=response.status_code,
        errors=errors,
    )
    response.data = ApiResponse.error_result(message, errors).to_payload()
    return response


def flatten_errors(detail: Any, prefix: str = "") -> List[str]:
    """Flatten a DRF error structure into ``"field: message"`` strings."""
    if isinstance(detail, dict):
        flattened: List[str] = []
        for key, value in detail.items():
            if key == "detail":
                flattened.extend(flatten_errors(value, prefix))
                continue
            path = f"{prefix}.{key}" if prefix else str(key)
            flattened.extend(flatten_errors(value, path))
        return flattened
    if isinstance(detail, list):
        flattened = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                flattened.extend(flatten_errors(value, f"{prefix}[{index}]"))
            else:
                flattened.extend(flatten_errors(value, prefix))
        return flattened
    text = str(detail)
    return [f"{prefix}: {text}" if prefix else text]
