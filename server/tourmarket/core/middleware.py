"""Request correlation and access logging middleware."""

import logging
import time
import uuid
from typing import Callable, Iterable, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .config import settings
from .observability import metrics_collector

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Label for requests no route matched, keeping the label set bounded
UNMATCHED_ENDPOINT = "<unmatched>"

# Probe and scrape endpoints are only logged outside production
QUIET_PATHS = ("/health", "/ready", "/metrics", "/favicon.ico")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Correlate every request with an ID.

    A caller-supplied X-Request-ID is reused, otherwise one is generated. The
    ID is echoed on the response and bound to the structlog context while the
    request is handled.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or uuid.uuid4().hex
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

        response.headers[self.header_name] = request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request and feed the HTTP request metrics.

    Metrics are labelled with the matched route template, e.g.
    ``/api/v1/bookings/{booking_id}``, never the raw path.
    """

    def __init__(self, app: ASGIApp, quiet_paths: Optional[Iterable[str]] = None):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths or ())

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.headers.get("X-Real-IP") or (request.client.host if request.client else "unknown")

    @staticmethod
    def _endpoint(request: Request) -> str:
        route = request.scope.get("route")
        return getattr(route, "path", UNMATCHED_ENDPOINT)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            duration = time.perf_counter() - started
            metrics_collector.record_request(request.method, self._endpoint(request), status_code, duration)
            if request.url.path not in self.quiet_paths:
                self._log(request, status_code, duration)

        return response

    def _log(self, request: Request, status_code: int, duration: float) -> None:
        level = logging.ERROR if status_code >= 500 else logging.WARNING if status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"{request.method} {request.url.path} -> {status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round(duration * 1000, 2),
                "client_ip": self._client_ip(request),
                "user_agent": request.headers.get("User-Agent", "unknown"),
            }
        )


def setup_middleware(app, enable_logging: bool = True) -> None:
    """
    Register the middleware on the FastAPI app.

    Args:
        app: FastAPI application instance
        enable_logging: Whether to add the access log middleware
    """
    # Last added runs first, so the request ID is bound before access logging
    if enable_logging:
        app.add_middleware(
            AccessLogMiddleware,
            quiet_paths=QUIET_PATHS if settings.is_production else ("/metrics",),
        )

    app.add_middleware(RequestIDMiddleware)
