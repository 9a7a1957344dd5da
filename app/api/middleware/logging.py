# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the menu service: what was asked for,
# how it went and how long it took, each tagged with its own tracking number.
# 🧪 Purpose (Technical Summary):
# Request logging middleware that assigns or propagates X-Request-ID, binds it to the
# logging context for the duration of the request, and logs method, path, status and
# duration (WARNING for slow requests).
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, app.shared.utils.logging (log_context)
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Paths polled by probes are not worth a log line each
EXCLUDED_PATHS = {"/health", "/favicon.ico"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware with request correlation.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)

        with log_context(request_id=request_id):
            start_time = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                duration = time.perf_counter() - start_time
                logger.error(f"{request.method} {request.url.path} failed after {duration:.3f}s")
                raise

            duration = time.perf_counter() - start_time
            response.headers[REQUEST_ID_HEADER] = request_id
            self._log_response(request, response, duration)
            return response

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    def _log_response(self, request: Request, response: Response, duration: float) -> None:
        if request.url.path in EXCLUDED_PATHS:
            return

        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
            "client_ip": request.client.host if request.client else None,
        }
        message = f"{request.method} {request.url.path} -> {response.status_code} in {duration:.3f}s"

        if duration > self.slow_request_threshold:
            logger.warning(f"Slow request: {message}", extra=extra)
        elif response.status_code >= 500:
            logger.error(message, extra=extra)
        elif response.status_code >= 400:
            logger.warning(message, extra=extra)
        else:
            logger.info(message, extra=extra)
