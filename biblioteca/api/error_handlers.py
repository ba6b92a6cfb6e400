"""Error Handlers — global exception handlers for the Biblioteca API.

Invariants:
    - LibraryError -> its http_status with the to_response() body
    - RequestValidationError -> 400 with field-level details
    - Exception (catch-all) -> 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (LibraryError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from biblioteca.core.errors import LibraryError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_library_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_library_error_handler(app: FastAPI) -> None:

    @app.exception_handler(LibraryError)
    async def library_error_handler(request: Request, exc: LibraryError):
        """Handle all Biblioteca domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"LibraryError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "book_id": exc.context.book_id,
                "rental_id": exc.context.rental_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "message": "Invalid request data",
        "code": "VALIDATION_ERROR",
        "category": "validation",
        "severity": ErrorSeverity.ERROR.value,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
