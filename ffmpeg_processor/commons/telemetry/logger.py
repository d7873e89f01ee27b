"""Structured logging with JSON output and correlation ID support."""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, ClassVar, TextIO

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
log_context_var: ContextVar[dict[str, Any]] = ContextVar("log_context")

# Attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context, generating one if needed."""
    cid = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(cid)
    return cid


def get_log_context() -> dict[str, Any]:
    """Return a copy of the fields attached to every log line in this context."""
    return dict(log_context_var.get({}))


def set_log_context(**fields: Any) -> None:
    log_context_var.set({**log_context_var.get({}), **fields})


def clear_log_context() -> None:
    log_context_var.set({})


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed to a logging call through ``extra=``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Besides level, logger and message, each line carries the correlation ID,
    the active log context under ``context`` and any ``extra`` fields at the
    top level.
    """

    def __init__(
        self,
        *,
        include_timestamp: bool = True,
        include_path: bool = True,
    ) -> None:
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_path = include_path

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {}
        if self.include_timestamp:
            payload["timestamp"] = datetime.fromtimestamp(record.created, UTC).isoformat()
        payload["level"] = record.levelname
        payload["logger"] = record.name
        if self.include_path:
            payload["path"] = f"{record.pathname}:{record.lineno}"
        if cid := get_correlation_id():
            payload["correlation_id"] = cid
        payload["message"] = record.getMessage()
        if context := get_log_context():
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(record_extras(record))
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line console output, colored by level when writing to a terminal."""

    LEVEL_COLORS: ClassVar[dict[int, str]] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self, *, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _level(self, record: logging.LogRecord) -> str:
        label = f"{record.levelname:<8}"
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{label}{self.RESET}" if color else label

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, UTC)
        line = f"{created:%Y-%m-%d %H:%M:%S} {self._level(record)} [{record.name}]"
        if cid := get_correlation_id():
            line += f" [{cid[:8]}]"
        line += f" {record.getMessage()}"

        context = get_log_context()
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    level: str = "INFO",
    format_type: str = "json",
    logger_name: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route a logger to a single stream handler.

    Args:
        level: Log level name.
        format_type: 'json' or 'text'.
        logger_name: Logger to configure. Defaults to the root logger.
        stream: Output stream, stdout by default. The MCP server passes
            stderr since stdout carries the protocol.

    Returns:
        The configured logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    output = stream or sys.stdout

    handler = logging.StreamHandler(output)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JsonFormatter()
        if format_type == "json"
        else TextFormatter(use_colors=output.isatty())
    )

    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
