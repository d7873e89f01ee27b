"""Request logging middleware."""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ffmpeg_processor.commons.telemetry import LogContext, get_logger, set_correlation_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its duration and tag it with a request ID.

    The request ID is taken from the ``X-Request-ID`` header when present and
    doubles as the log correlation ID, so ffmpeg runs triggered by an upload
    can be traced back to it. It is echoed on the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        set_correlation_id(request_id)

        with LogContext(method=request.method, path=request.url.path):
            client = request.client.host if request.client else "unknown"
            logger.info("Request started", extra={"client_ip": client})
            started = time.perf_counter()
            # Exceptions are already error envelopes at this point
            response = await call_next(request)
            logger.info(
                "Request completed",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": _elapsed_ms(started),
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
