"""
Authorization Policy for the Menu Management API.

Three rules are applied per route: admin-only, owner-or-admin and public-read.
List scoping for non-admin callers lives here too so every service resolves
the owner filter the same way.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from .exceptions import AuthorizationError

logger = logging.getLogger(__name__)

ADMIN_ROLE_SLUG = "admin"
USER_ROLE_SLUG = "user"


def require_admin(current_user, action: str = "perform this action") -> None:
    """
    Raise unless the caller holds the admin role.

    Raises:
        AuthorizationError: If the caller is not an admin
    """
    if not current_user.is_admin():
        logger.warning(f"Admin-only action denied for user {current_user.user_id}: {action}")
        raise AuthorizationError(
            message="Access denied. Admin role required.",
            required_permission="admin",
        )


def is_owner_or_admin(current_user, owner_id: Optional[Union[UUID, str]]) -> bool:
    if current_user.is_admin():
        return True
    return owner_id is not None and str(owner_id) == str(current_user.user_id)


def require_owner_or_admin(
    current_user,
    owner_id: Optional[Union[UUID, str]],
    resource_type: str,
    resource_id: Optional[Union[UUID, str]] = None,
    message: Optional[str] = None,
) -> None:
    """
    Raise unless the caller owns the resource or is an admin.

    Args:
        current_user: Authenticated caller
        owner_id: Owning user id of the resource (directly or via its Business)
        resource_type: Entity name, used in the error details
        resource_id: Entity id, used in the error details
        message: Override for the default denial message

    Raises:
        AuthorizationError: If neither rule holds
    """
    if is_owner_or_admin(current_user, owner_id):
        return

    logger.warning(
        f"Ownership check failed: user {current_user.user_id} on {resource_type} {resource_id}"
    )
    raise AuthorizationError(
        message=message or f"You do not have permission to access this {resource_type}",
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id else None,
    )


def scoped_user_filter(current_user, requested_user_id: Optional[UUID]) -> Optional[UUID]:
    """
    Resolve the owner filter for a list read.

    Admins may filter by any user (or none). Non-admins are forced onto their own
    id, and naming somebody else is an error rather than a silent override.

    Raises:
        AuthorizationError: If a non-admin asks for another user's records
    """
    if current_user.is_admin():
        return requested_user_id

    if requested_user_id is not None and requested_user_id != current_user.user_id:
        logger.warning(
            f"User {current_user.user_id} attempted to list records of user {requested_user_id}"
        )
        raise AuthorizationError(
            message="You can only access your own records",
            resource_type="user",
            resource_id=str(requested_user_id),
        )
    return current_user.user_id
