"""Centralized error handling utilities."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from flask import g, jsonify
from flask.wrappers import Response
from pydantic import ValidationError

from petfeeder.exceptions import (
    AuthenticationException,
    BusinessLogicException,
    InvalidOperationException,
    ProcessingException,
    RecordNotFoundException,
    ValidationException,
)
from petfeeder.utils import get_current_correlation_id

logger = logging.getLogger(__name__)


def mark_request_failed() -> None:
    """Flag the current request's database session for rollback at teardown."""
    g.needs_rollback = True


def build_error_response(
    message: str,
    code: str | None = None,
    status_code: int = 400,
    errors: list[dict[str, str]] | None = None,
    extra: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    """Build error response with correlation ID and optional error code."""
    response_data: dict[str, Any] = {
        "success": False,
        "message": message,
    }

    if code:
        response_data["code"] = code

    if errors is not None:
        response_data["errors"] = errors

    if extra:
        response_data.update(extra)

    response_data["correlationId"] = get_current_correlation_id()

    return jsonify(response_data), status_code


def _business_error_status(e: BusinessLogicException) -> int:
    """Map a domain exception onto its HTTP status code."""
    match e:
        case AuthenticationException():
            return 401
        case RecordNotFoundException():
            return 404
        case ProcessingException():
            return 500
        case ValidationException() | InvalidOperationException():
            return 400
        case _:
            return 400


def handle_api_errors(
    func: Callable[..., Any],
) -> Callable[..., Response | tuple[Response | str, int]]:
    """Decorator to handle common API errors consistently.

    Handles ValidationError, custom exceptions, and generic exceptions
    with appropriate HTTP status codes and error messages. Business errors
    leave the session to be committed, so audit rows written before the
    error (such as a failed dispense) persist; anything unexpected rolls
    the request back.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            # Pydantic validation errors
            error_details = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                error_details.append({"field": field, "message": error["msg"]})

            logger.info("Validation failed in %s: %s", func.__name__, error_details)
            return build_error_response(
                "Validation failed",
                code="VALIDATION_FAILED",
                errors=error_details,
            )

        except BusinessLogicException as e:
            status_code = _business_error_status(e)
            if status_code >= 500:
                logger.error("Exception in %s: %s", func.__name__, e.message, exc_info=True)
                mark_request_failed()
            else:
                logger.warning("%s in %s: %s", type(e).__name__, func.__name__, e.message)

            return build_error_response(
                e.message,
                code=e.error_code,
                status_code=status_code,
                extra=e.payload,
            )

        except Exception as e:
            logger.error("Exception in %s: %s", func.__name__, str(e), exc_info=True)
            mark_request_failed()
            return build_error_response("Internal server error", status_code=500)

    return wrapper
