"""
Rate limiting for the Menu Management API.
Provides the process-wide slowapi limiter used on the authentication endpoints.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from ..config.settings import get_settings
from .responses import error_response

logger = logging.getLogger(__name__)

_settings = get_settings()

# Shared by the route decorators and app.state.limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=_settings.RATE_LIMIT_ENABLED,
)


def auth_rate_limit() -> str:
    """Rate limit string applied to signup, signin and federated login."""
    return get_settings().AUTH_RATE_LIMIT


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Render a slowapi rejection as a 429 envelope."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}")
    return error_response(
        status_code=429,
        message="Too many requests, please try again later",
        error={"limit": str(exc.detail)},
    )
