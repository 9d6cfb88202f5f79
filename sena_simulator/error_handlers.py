"""Map simulator, history and request errors onto the JSON envelope."""

from __future__ import annotations

import logging

from flask import Flask, request
from marshmallow import ValidationError as MarshmallowValidationError
from werkzeug.exceptions import HTTPException

from sena_simulator.errors import AppError, ValidationError
from sena_simulator.utils.responses import fail

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Install the handlers on `app`.

    Domain errors keep their own code and status: out-of-range dozens, counts
    or iterations (`validation_error`), unknown or not-yet-completed job ids
    (`not_found`), tickets requested from a running, cancelled or superseded
    simulation (`conflict`), and history uploads that are malformed
    (`invalid_format`) or contain no usable contest (`no_valid_records`).
    """

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", exc.code, request.path, exc.message)
        return fail(exc.code, exc.message, exc.status_code, exc.details)

    @app.errorhandler(MarshmallowValidationError)
    def _handle_schema_error(exc: MarshmallowValidationError):
        # Query strings (size, tier, offset) and JSON bodies (dozens, iterations, games) alike.
        wrapped = ValidationError(details=exc.messages)
        return fail(wrapped.code, wrapped.message, wrapped.status_code, wrapped.details)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        status = int(getattr(exc, "code", 500) or 500)
        if status == 404:
            return fail("not_found", f"No route for {request.path}", 404)

        return fail(
            "http_error",
            getattr(exc, "description", "HTTP error"),
            status,
            details={"name": getattr(exc, "name", "HTTPException")},
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.path)
        return fail("internal_error", "Internal server error", 500)
