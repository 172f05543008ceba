"""Request failure classes and the FastAPI handlers that serialize them."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .models import ErrorResponse

logger = logging.getLogger(__name__)


class ShortsError(Exception):
    """Base exception carrying the HTTP status and the error envelope fields."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: str | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or None
        self.reason = reason or None

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.message, details=self.details, reason=self.reason)


class ConfigurationError(ShortsError):
    def __init__(self, message: str = "YouTube API key not configured"):
        super().__init__(message, status_code=500)


class UpstreamTransportError(ShortsError):
    """The YouTube API could not be reached or returned an unreadable body."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message, status_code=500, details=details)


class UpstreamAPIError(ShortsError):
    """The YouTube API answered with an `error` object."""

    def __init__(self, message: str, details: str | None = None, reason: str | None = None):
        super().__init__(message, status_code=500, details=details, reason=reason)


class NotFoundError(ShortsError):
    def __init__(self, message: str = "Channel not found"):
        super().__init__(message, status_code=404)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ShortsError)
    async def handle_shorts_error(request: Request, exc: ShortsError):
        logger.error(
            "Error on %s: %s - %s (reason: %s)",
            request.url.path,
            exc.message,
            exc.details or "",
            exc.reason or "",
        )
        return JSONResponse(
            exc.to_response().model_dump(exclude_none=True),
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s: %s", request.url.path, exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)
