# 📄 File: app/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Checks the "pass" a caller shows with each request, works out who they are,
# and whether they hold the admin role.
# 🧪 Purpose (Technical Summary):
# Authentication Guard as FastAPI dependencies: bearer extraction, JWT verification,
# user + role resolution (one store read) and the admin-only variant.
# 🔗 Dependencies:
# FastAPI security, app.shared.core.security, app.shared.core.dependencies (CurrentUser),
# app.modules.user_management.infrastructure.database.models
# 🔄 Connected Modules / Calls From:
# Every protected route in every module

"""
User Management Module Dependencies

- get_current_user: bearer credential -> CurrentUser (401/404 on failure)
- get_current_admin_user: get_current_user + admin role (403 otherwise)
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import AuthenticationError, InvalidTokenError, NotFoundError
from app.shared.core.permissions import require_admin
from app.shared.core.security import get_security_manager
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.logging import user_id_var

from ..infrastructure.database.models import RoleModel, UserModel

logger = logging.getLogger(__name__)

# auto_error=False so a missing header renders our own 401 envelope
security = HTTPBearer(auto_error=False)


async def resolve_user_from_token(db: AsyncSession, token: str) -> CurrentUser:
    """
    Verify a bearer credential and load the user it names.

    Raises:
        TokenExpiredError: Credential past its validity window
        InvalidTokenError: Signature or claim mismatch
        NotFoundError: No user with the claimed id
    """
    payload = get_security_manager().verify_token(token)

    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError:
        raise InvalidTokenError(reason="Malformed subject")

    user = await db.get(UserModel, user_id)
    if user is None:
        logger.warning(f"Token subject does not exist: {user_id}")
        raise NotFoundError(message="User not found", resource_type="user", resource_id=str(user_id))

    role = await db.get(RoleModel, user.role_id) if user.role_id else None

    return CurrentUser(
        user_id=user.id,
        username=user.username,
        email=user.email,
        name=user.name,
        role_id=user.role_id,
        role_slug=role.slug if role else None,
        role_name=role.name if role else None,
        token_payload=payload,
    )


# =========================================================================
# CORE AUTHENTICATION DEPENDENCIES
# =========================================================================

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> CurrentUser:
    """
    Resolve the authenticated caller.

    Raises:
        AuthenticationError: Missing or malformed Authorization header
        TokenExpiredError / InvalidTokenError: Credential rejected
        NotFoundError: Credential names an unknown user
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    current_user = await resolve_user_from_token(db, credentials.credentials)
    request.state.user_id = str(current_user.user_id)
    user_id_var.set(str(current_user.user_id))
    return current_user


async def get_current_admin_user(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """
    Require the admin role.

    Raises:
        NotFoundError: The caller's role record is missing
        AuthorizationError: The caller is not an admin
    """
    if current_user.role_slug is None:
        raise NotFoundError(message="Role not found", resource_type="role")
    require_admin(current_user)
    return current_user
