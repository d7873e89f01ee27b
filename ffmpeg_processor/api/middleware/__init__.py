"""API middleware components."""

from ffmpeg_processor.api.middleware.error_handler import (
    APIError,
    error_handler_middleware,
)
from ffmpeg_processor.api.middleware.logging import LoggingMiddleware

__all__ = [
    "APIError",
    "LoggingMiddleware",
    "error_handler_middleware",
]
