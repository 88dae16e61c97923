"""
Structured Logging Middleware

Request logging with a per-request id, timing and the authenticated user,
plus the root logger setup used by the application factory.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"

# Paths that are not worth an access log line
QUIET_PATHS = ("/health",)

# Context variable for request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

EXTRA_FIELDS = ("user_id", "method", "path", "status_code", "error_code", "duration_ms", "client_ip")


class RequestIdFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter: one object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


def client_address(request: Request) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or (request.client.host if request.client else "unknown")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request/response logging.

    Reuses an incoming ``X-Request-ID`` or generates one, echoes it on the
    response and logs method, path, status and duration. 5xx are logged at
    ERROR, 4xx at WARNING and everything else at INFO.
    """

    def __init__(self, app: ASGIApp, logger_name: str = "content_admin.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                self._log_request(request, 500, start_time, error=str(e))
                raise

            response.headers[REQUEST_ID_HEADER] = request_id
            self._log_request(request, response.status_code, start_time)
            return response
        finally:
            request_id_var.reset(token)

    def _log_request(self, request: Request, status_code: int, start_time: float, error: str | None = None) -> None:
        if request.url.path in QUIET_PATHS:
            return

        duration_ms = (time.perf_counter() - start_time) * 1000

        if status_code >= 500:
            log_level = logging.ERROR
        elif status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_address(request),
        }

        # Set by get_current_user once the bearer token is verified
        user = getattr(request.state, "user", None)
        if user is not None:
            extra["user_id"] = user.id

        message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"
        if error:
            message += f" - Error: {error}"

        self.logger.log(log_level, message, extra=extra)


def setup_structured_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use the JSON formatter instead of the plain text one
        log_file: Optional file path for log output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()

    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"))

    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    loggers_config = {
        "content_admin": log_level,
        "content_admin.access": log_level,
        "uvicorn": "WARNING",
        "uvicorn.access": "WARNING",
        "sqlalchemy.engine": "WARNING",
    }

    for logger_name, level in loggers_config.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get("")
