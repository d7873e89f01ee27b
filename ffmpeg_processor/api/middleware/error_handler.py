"""Error handling middleware and exception handlers."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from ffmpeg_processor.commons.telemetry.logger import get_logger
from ffmpeg_processor.domain.exceptions import (
    DomainException,
    FFmpegExecutionException,
    FFmpegNotAvailableException,
    InvalidResolutionException,
    MediaFileNotFoundException,
    PermissionDeniedException,
    ProbeParseException,
    UnsupportedAudioFormatException,
    UnsupportedUploadException,
    UploadTooLargeException,
)

logger = get_logger(__name__)


class APIError(Exception):
    """Base API error with code and details."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            code: Error code for clients.
            message: Human-readable error message.
            status_code: HTTP status code.
            details: Additional error details.
        """
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def _build_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build standardized error response."""
    request_id = getattr(request.state, "request_id", "unknown")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "request_id": request_id,
            }
        },
    )


@dataclass(frozen=True)
class _ErrorMapping:
    """How one family of domain errors is reported over HTTP."""

    code: str
    status_code: int
    log_level: int = logging.WARNING
    details: Callable[[Any], dict[str, Any]] = lambda _exc: {}


# First match wins, so subclasses go before their bases
_DOMAIN_ERRORS: list[tuple[tuple[type[DomainException], ...], _ErrorMapping]] = [
    (
        (InvalidResolutionException, UnsupportedAudioFormatException),
        _ErrorMapping(
            "INVALID_OPTION",
            status.HTTP_400_BAD_REQUEST,
            details=lambda exc: {
                "value": exc.value,
                "valid_options": exc.valid_options,
            },
        ),
    ),
    (
        (UnsupportedUploadException,),
        _ErrorMapping(
            "UNSUPPORTED_FILE_TYPE",
            status.HTTP_400_BAD_REQUEST,
            details=lambda exc: {"filename": exc.filename},
        ),
    ),
    (
        (UploadTooLargeException,),
        _ErrorMapping(
            "FILE_TOO_LARGE",
            status.HTTP_413_CONTENT_TOO_LARGE,
            details=lambda exc: {"limit_bytes": exc.limit_bytes},
        ),
    ),
    (
        (MediaFileNotFoundException,),
        _ErrorMapping("MEDIA_NOT_FOUND", status.HTTP_404_NOT_FOUND),
    ),
    (
        (PermissionDeniedException,),
        _ErrorMapping("PERMISSION_DENIED", status.HTTP_403_FORBIDDEN, logging.INFO),
    ),
    (
        (FFmpegNotAvailableException,),
        _ErrorMapping(
            "FFMPEG_UNAVAILABLE",
            status.HTTP_503_SERVICE_UNAVAILABLE,
            logging.ERROR,
            details=lambda exc: {"binary": exc.binary},
        ),
    ),
    (
        (FFmpegExecutionException, ProbeParseException),
        _ErrorMapping(
            "PROCESSING_ERROR",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            logging.ERROR,
        ),
    ),
    (
        (DomainException,),
        _ErrorMapping("DOMAIN_ERROR", status.HTTP_500_INTERNAL_SERVER_ERROR),
    ),
]


def _handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """Turn an exception into the standard error envelope.

    Args:
        request: HTTP request.
        exc: Exception to handle.

    Returns:
        JSON error response.
    """
    if isinstance(exc, APIError):
        logger.warning(
            f"API error: {exc.code}",
            extra={"error_code": exc.code, "details": exc.details},
        )
        return _build_error_response(
            request=request,
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
        )

    for types, mapping in _DOMAIN_ERRORS:
        if isinstance(exc, types):
            logger.log(
                mapping.log_level,
                f"{type(exc).__name__}: {exc}",
                extra={"error_code": mapping.code},
            )
            return _build_error_response(
                request=request,
                code=mapping.code,
                message=str(exc),
                status_code=mapping.status_code,
                details=mapping.details(exc),
            )

    logger.exception(f"Unexpected error: {exc}")
    return _build_error_response(
        request=request,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def error_handler_middleware(
    request: Request,
    call_next: RequestResponseEndpoint,
) -> Response:
    """Middleware to catch and format all exceptions.

    Args:
        request: HTTP request.
        call_next: Next handler in chain.

    Returns:
        HTTP response.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        return _handle_exception(request, exc)
