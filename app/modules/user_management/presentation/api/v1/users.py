# 📄 File: app/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for looking at and managing user accounts. Admins can list everyone;
# people can see, change or remove only their own account.
#
# 🧪 Purpose (Technical Summary):
# FastAPI user management endpoints: admin-only listing with search/pagination,
# owner-or-admin get/update/delete.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters
# - app.modules.user_management.domain.services.user_service
# - Authentication and authorization dependencies
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /users)

"""
Users API Endpoints

Endpoints:
- GET /: List users (admin only, search over name/username/email/phone)
- GET /{user_id}: Get user (self or admin)
- PATCH /{user_id}: Update user (self or admin; role changes admin only)
- DELETE /{user_id}: Delete user (self or admin)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser, get_notifier
from app.shared.core.responses import success_response
from app.shared.events.notifier import EventNotifier
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import parse_optional_uuid, parse_uuid
from app.shared.utils.query import QueryParams, get_list_params

from ....domain.services.user_service import UserService
from ...dependencies import get_current_admin_user, get_current_user
from ..schemas.user_schemas import UserUpdateRequest

logger = logging.getLogger(__name__)

users_router = APIRouter()


def get_user_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> UserService:
    return UserService(db, notifier)


@users_router.get("", summary="List users (admin)")
async def list_users(
    params: QueryParams = Depends(get_list_params),
    role_id: Optional[str] = Query(None, alias="roleId"),
    _: CurrentUser = Depends(get_current_admin_user),
    service: UserService = Depends(get_user_service),
):
    result = await service.list_users(params, parse_optional_uuid(role_id, "role"))
    return success_response("Users fetched successfully", result)


@users_router.get("/{user_id}", summary="Get user")
async def get_user(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_user(parse_uuid(user_id, "user"), current_user)
    return success_response("User details fetched successfully", user)


@users_router.patch("/{user_id}", summary="Update user")
async def update_user(
    user_id: str,
    payload: UserUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_user(parse_uuid(user_id, "user"), payload.changes(), current_user)
    return success_response("User updated successfully", user)


@users_router.delete("/{user_id}", summary="Delete user")
async def delete_user(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_user(parse_uuid(user_id, "user"), current_user)
    return success_response("User deleted successfully")
