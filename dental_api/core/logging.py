"""
Structured logging for the clinic API.

Every request gets a short correlation id (or keeps the caller's
``X-Request-ID``) which is bound into structlog's context vars, so log lines
emitted anywhere during the request carry it without passing loggers around.
"""
import logging
import time
import uuid

import structlog
from fastapi import Request

CORRELATION_HEADER = "X-Correlation-ID"
INCOMING_ID_HEADER = "x-request-id"
SLOW_REQUEST_SECONDS = 2.0


class TruncatingProcessor:
    """Cap free-text fields; patient notes and stack messages can be long."""

    fields = ("event", "error", "detail")

    def __init__(self, max_length: int = 200):
        self.max_length = max_length

    def __call__(self, logger, method_name, event_dict):
        for key in self.fields:
            value = event_dict.get(key)
            if isinstance(value, str) and len(value) > self.max_length:
                event_dict[key] = value[: self.max_length] + "..."
        return event_dict


def setup_logging(debug: bool = False, level: str = "INFO", max_log_length: int = 200):
    """Console output in development, one JSON object per line elsewhere."""
    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

    renderer = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            TruncatingProcessor(max_length=max_log_length),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=log_level, format="%(message)s")
    logging.getLogger().setLevel(log_level)
    # SQL echo goes through DB_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str = __name__):
    return structlog.get_logger(name)


def _correlation_id(request: Request) -> str:
    incoming = request.headers.get(INCOMING_ID_HEADER, "").strip()
    if incoming and len(incoming) <= 64:
        return incoming
    return uuid.uuid4().hex[:8]


class LoggingMiddleware:
    """
    HTTP middleware (``app.middleware("http")``) binding the correlation id.

    Completed requests are logged when ``log_requests`` is on, when they are
    slow, or when they end in a 4xx/5xx.
    """

    def __init__(self, log_requests: bool = False):
        self.log_requests = log_requests
        self.logger = get_logger("dental_api.http")

    async def __call__(self, request: Request, call_next):
        correlation_id = _correlation_id(request)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )
        request.state.correlation_id = correlation_id
        start = time.perf_counter()

        # An unhandled exception leaves the context bound so unhandled_error_handler
        # logs it once, with the correlation id; the next request clears it.
        response = await call_next(request)
        duration = time.perf_counter() - start
        slow = duration > SLOW_REQUEST_SECONDS
        if self.log_requests or slow or response.status_code >= 400:
            self.logger.info(
                "request_complete",
                status_code=response.status_code,
                duration=round(duration, 3),
                slow=slow,
            )
        response.headers[CORRELATION_HEADER] = correlation_id
        structlog.contextvars.clear_contextvars()
        return response
