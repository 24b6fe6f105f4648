"""Global exception handlers mapping catalog errors onto HTTP responses.

    NotFoundError        -> 404 {"error": message}
    InvalidArgumentError -> 400 {"error": message}
    validation failure   -> 400 {"error": ..., "fields": {field: message}}
    anything else        -> 500 with a generic message only
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from filmorate.core.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

ERROR_KEY = "error"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.warning("Not found on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={ERROR_KEY: exc.message})

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        logger.warning("Bad request on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={ERROR_KEY: exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = _field_errors(exc)
        logger.warning("Validation error on %s: %s", request.url.path, fields)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={ERROR_KEY: "Validation failed", "fields": fields},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={ERROR_KEY: "An unexpected error occurred"},
        )


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for err in exc.errors():
        # drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in err.get("loc", ())[1:]] or [str(p) for p in err.get("loc", ())]
        errors[".".join(loc) or "request"] = err.get("msg", "Invalid value")
    return errors
