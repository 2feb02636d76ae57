"""Error taxonomy and the centralized error responder.

Learn: Services and auth dependencies raise ApiError subclasses; route
handlers never catch them. FastAPI routes every exception to the
handlers registered by register_error_handlers(), which log the failure
and answer with {"message": ...} and the error's status code. The first
raised error ends the request.
"""

from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger()

GENERIC_MESSAGE = "Sorry, something broke :("


class ApiError(Exception):
    """Base class for failures that map to an HTTP response."""

    status_code: int = 500
    message: str = GENERIC_MESSAGE

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        headers: Optional[dict[str, str]] = None,
    ):
        self.message = message or self.message
        self.headers = headers
        super().__init__(self.message)


class InvalidTokenError(ApiError):
    """Bad signature, malformed payload, or expired token."""

    status_code = 401
    message = "Invalid token."


class UnauthorizedError(ApiError):
    status_code = 401
    message = "You must be logged in."


class AuthenticationError(ApiError):
    """Login failed. Same shape whether the username or the password was wrong."""

    status_code = 401
    message = "Invalid username or password."


class ForbiddenError(ApiError):
    status_code = 403
    message = "Forbidden."


class NotFoundError(ApiError):
    status_code = 404
    message = "Not found."


class ConflictError(ApiError):
    status_code = 409
    message = "Conflict."


def _respond(
    status_code: int,
    message: str,
    headers: Optional[dict[str, str]] = None,
    **extra,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, **extra},
        headers=headers,
    )


async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    logger.warning(
        "request.failed",
        method=request.method,
        path=request.url.path,
        status=exc.status_code,
        error=type(exc).__name__,
        message=exc.message,
    )
    return _respond(exc.status_code, exc.message, exc.headers)


async def _handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    # Route handlers raise ApiError, so a bare 404 here means no route matched
    if exc.status_code == 404:
        message = "Endpoint not found."
    else:
        message = str(exc.detail)
    logger.warning(
        "request.failed",
        method=request.method,
        path=request.url.path,
        status=exc.status_code,
        message=message,
    )
    return _respond(exc.status_code, message, getattr(exc, "headers", None))


async def _handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "request.invalid",
        method=request.method,
        path=request.url.path,
        errors=len(exc.errors()),
    )
    return _respond(422, "Invalid request.", errors=jsonable_encoder(exc.errors()))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """Log a crash and answer with the generic 500. The request-id middleware uses it too."""
    logger.error(
        "request.crashed",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return _respond(500, GENERIC_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Install the error funnel on the app."""
    app.add_exception_handler(ApiError, _handle_api_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected)
