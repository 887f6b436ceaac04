"""Exception handlers that give every error response the same shape.

Error Response Format:
    {
        "error": "HTTP reason phrase",
        "message": "Human-readable error message"
    }
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from focusforge.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)


logger = logging.getLogger(__name__)

DOMAIN_ERROR_TO_STATUS: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}

GENERIC_ERROR_MESSAGE = "Something went wrong"


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": _reason(status_code), "message": message},
        headers=headers,
    )


def _status_for_domain_error(exc: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_TO_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_exception_handlers(app: FastAPI, *, expose_errors: bool = False) -> None:
    """Register handlers; ``expose_errors`` leaks exception text in 500 responses."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = str(exc.detail)
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = f"Route {request.url.path} not found"
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = _status_for_domain_error(exc)
        if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Unmapped domain error on %s: %s", request.url.path, exc)
            return error_response(status_code, str(exc) if expose_errors else GENERIC_ERROR_MESSAGE)
        return error_response(status_code, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = str(exc) if expose_errors else GENERIC_ERROR_MESSAGE
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
