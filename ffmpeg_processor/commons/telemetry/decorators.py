"""Timing decorator and scoped log context."""

import functools
import inspect
import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import Token
from typing import Any, ParamSpec, TypeVar, overload

from ffmpeg_processor.commons.telemetry.logger import (
    get_logger,
    log_context_var,
)

P = ParamSpec("P")
R = TypeVar("R")


@contextmanager
def _stopwatch(
    log: logging.Logger, level: int, label: str, threshold_ms: float | None
) -> Iterator[None]:
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        if threshold_ms is None or elapsed_ms >= threshold_ms:
            log.log(level, f"{label} completed", extra={"duration_ms": round(elapsed_ms, 2)})


@overload
def timed(func: Callable[P, R]) -> Callable[P, R]: ...


@overload
def timed(
    *,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
    threshold_ms: float | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]: ...


def timed(
    func: Callable[P, R] | None = None,
    *,
    logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
    threshold_ms: float | None = None,
) -> Callable[P, R] | Callable[[Callable[P, R]], Callable[P, R]]:
    """Log how long a function or coroutine function took.

    Usable bare (``@timed``) or with options. The duration is reported in
    the ``duration_ms`` extra field, also when the call raises.

    Args:
        func: Function being decorated, when used bare.
        logger: Logger to report to. Defaults to the function's module logger.
        level: Level of the timing record.
        threshold_ms: Skip calls faster than this many milliseconds.
    """

    def decorator(fn: Callable[P, R]) -> Callable[P, R]:
        log = logger or get_logger(fn.__module__)
        label = fn.__qualname__

        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                with _stopwatch(log, level, label, threshold_ms):
                    return await fn(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            with _stopwatch(log, level, label, threshold_ms):
                return fn(*args, **kwargs)

        return wrapper

    return decorator(func) if func is not None else decorator


class LogContext:
    """Attach fields to every log line emitted inside a ``with`` block.

    Example:
        with LogContext(tool="resize-video"):
            logger.info("starting")
    """

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self._token: Token[dict[str, Any]] | None = None

    def __enter__(self) -> "LogContext":
        self._token = log_context_var.set({**log_context_var.get({}), **self.fields})
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._token is not None:
            log_context_var.reset(self._token)
            self._token = None
