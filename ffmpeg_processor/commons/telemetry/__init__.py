"""Logging setup, correlation IDs and timing helpers."""

from ffmpeg_processor.commons.telemetry.decorators import LogContext, timed
from ffmpeg_processor.commons.telemetry.logger import (
    JsonFormatter,
    TextFormatter,
    clear_log_context,
    configure_logging,
    get_correlation_id,
    get_log_context,
    get_logger,
    set_correlation_id,
    set_log_context,
)

__all__ = [
    "JsonFormatter",
    "LogContext",
    "TextFormatter",
    "clear_log_context",
    "configure_logging",
    "get_correlation_id",
    "get_log_context",
    "get_logger",
    "set_correlation_id",
    "set_log_context",
    "timed",
]
