# 📄 File: app/modules/user_management/presentation/api/v1/roles.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for listing roles (open to everyone) and for creating, changing and
# removing them (admins only).
# 🧪 Purpose (Technical Summary):
# FastAPI Role endpoints: public reads, admin-only writes, envelope responses.
# 🔗 Dependencies:
# FastAPI router, RoleService, role_schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (mounted at /roles)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser, get_notifier
from app.shared.core.responses import success_response
from app.shared.events.notifier import EventNotifier
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import parse_uuid
from app.shared.utils.query import QueryParams, get_list_params

from ....domain.services.role_service import RoleService
from ...dependencies import get_current_admin_user
from ..schemas.role_schemas import RoleCreateRequest, RoleStatus, RoleUpdateRequest

logger = logging.getLogger(__name__)

roles_router = APIRouter()


def get_role_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> RoleService:
    return RoleService(db, notifier)


@roles_router.post("", status_code=status.HTTP_201_CREATED, summary="Create role (admin)")
async def create_role(
    payload: RoleCreateRequest,
    _: CurrentUser = Depends(get_current_admin_user),
    service: RoleService = Depends(get_role_service),
):
    role = await service.create_role(payload.model_dump())
    return success_response("Role created successfully", role, status.HTTP_201_CREATED)


@roles_router.get("", summary="List roles")
async def list_roles(
    params: QueryParams = Depends(get_list_params),
    role_status: Optional[RoleStatus] = Query(None, alias="status"),
    service: RoleService = Depends(get_role_service),
):
    return success_response("Roles fetched successfully", await service.list_roles(params, role_status))


@roles_router.get("/{role_id}", summary="Get role")
async def get_role(role_id: str, service: RoleService = Depends(get_role_service)):
    role = await service.get_role(parse_uuid(role_id, "role"))
    return success_response("Role fetched successfully", role)


@roles_router.patch("/{role_id}", summary="Update role (admin)")
async def update_role(
    role_id: str,
    payload: RoleUpdateRequest,
    _: CurrentUser = Depends(get_current_admin_user),
    service: RoleService = Depends(get_role_service),
):
    role = await service.update_role(parse_uuid(role_id, "role"), payload.changes())
    return success_response("Role updated successfully", role)


@roles_router.delete("/{role_id}", summary="Delete role (admin)")
async def delete_role(
    role_id: str,
    _: CurrentUser = Depends(get_current_admin_user),
    service: RoleService = Depends(get_role_service),
):
    await service.delete_role(parse_uuid(role_id, "role"))
    return success_response("Role deleted successfully")
