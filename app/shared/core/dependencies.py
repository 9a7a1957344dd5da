"""
Common FastAPI dependencies for the Menu Management API.
Provides the authenticated-user value object and the event notifier.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from ..events.notifier import EventNotifier, get_default_notifier
from .permissions import ADMIN_ROLE_SLUG

logger = logging.getLogger(__name__)


class CurrentUser:
    """User information resolved from the bearer credential."""

    def __init__(
        self,
        user_id: UUID,
        username: str,
        email: str,
        name: Optional[str] = None,
        role_id: Optional[UUID] = None,
        role_slug: Optional[str] = None,
        role_name: Optional[str] = None,
        token_payload: Optional[Dict[str, Any]] = None
    ):
        self.user_id = user_id
        self.username = username
        self.email = email
        self.name = name
        self.role_id = role_id
        self.role_slug = role_slug
        self.role_name = role_name
        self.token_payload = token_payload or {}

    def is_admin(self) -> bool:
        """Check if user has admin privileges."""
        return self.role_slug == ADMIN_ROLE_SLUG


def get_notifier() -> EventNotifier:
    """
    Event notifier injected into every domain service.

    Tests override this dependency with a recording notifier.
    """
    return get_default_notifier()
