"""Error taxonomy and the exception handlers that render the error envelope.

Every failure leaves the API as ``{"errors": "<description>"}`` with the
status code of the failure. Unhandled exceptions become 500 without any
internal detail in the body.
"""

import logging

from litestar import Request, Response
from litestar.exceptions import HTTPException
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for failures with a client-facing message."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Malformed, missing or conflicting input."""

    status_code = 400

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or [message]


class AuthError(AppError):
    """Missing/invalid/expired token or bad credentials."""

    status_code = 401


class NotFoundError(AppError):
    """Resource absent or not owned by the caller."""

    status_code = 404


def _envelope(message: str, status_code: int) -> Response[dict]:
    return Response({"errors": message}, status_code=status_code)


def app_error_handler(request: Request, exc: AppError) -> Response[dict]:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s rejected (%d): %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return _envelope(exc.message, exc.status_code)


def http_error_handler(request: Request, exc: HTTPException) -> Response[dict]:
    """Framework errors: malformed JSON, unknown routes, bad parameter types."""
    logger.info(
        "%s %s rejected by framework (%d): %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    return _envelope(exc.detail, exc.status_code)


def internal_error_handler(request: Request, exc: Exception) -> Response[dict]:
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return _envelope("Internal server error", HTTP_500_INTERNAL_SERVER_ERROR)


exception_handlers = {
    AppError: app_error_handler,
    HTTPException: http_error_handler,
    Exception: internal_error_handler,
}
