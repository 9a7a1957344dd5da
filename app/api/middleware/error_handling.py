# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# The last safety net: if something breaks in a way nobody planned for, this turns it
# into a plain "something went wrong" answer instead of leaking technical details.
# 🧪 Purpose (Technical Summary):
# Fallback error handling middleware. Domain exceptions are rendered by the app-level
# handlers; anything that escapes them is logged with its traceback and rendered as
# a generic 500 envelope. Stack traces never reach the client.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, app.shared.core.responses
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration)

import logging

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.core.exceptions import MenuAPIException
from app.shared.core.responses import error_response

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global fallback error handler for the Menu Management API.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except MenuAPIException as exc:
            # Raised outside the routing layer (e.g. by another middleware)
            return error_response(exc.status_code, exc.message, exc.details or None)
        except Exception as exc:
            logger.error(
                f"Unhandled error in {request.method} {request.url.path}: {type(exc).__name__}",
                exc_info=True,
            )
            response = error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                response.headers["X-Request-ID"] = request_id
            return response
