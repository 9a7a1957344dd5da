# 📄 File: app/modules/catalog/presentation/api/v1/businesses.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for registering a business, browsing businesses and letting owners
# update or remove theirs.
#
# 🧪 Purpose (Technical Summary):
# FastAPI Business endpoints: authenticated create and scoped list, public detail,
# owner-or-admin update/delete.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters
# - app.modules.catalog.domain.services.business_service
# - app.modules.user_management.presentation.dependencies (auth guard)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /businesses)

"""
Businesses API Endpoints

Endpoints:
- POST /: Create business (owner defaults to caller)
- GET /: List businesses (non-admins see their own; filters userId, status)
- GET /{business_id}: Get business (public)
- PATCH /{business_id}: Update business (owner or admin)
- DELETE /{business_id}: Delete business (owner or admin)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.presentation.dependencies import get_current_user
from app.shared.core.dependencies import CurrentUser, get_notifier
from app.shared.core.responses import success_response
from app.shared.events.notifier import EventNotifier
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import parse_optional_uuid, parse_uuid
from app.shared.utils.query import QueryParams, get_depth_param, get_list_params

from ....domain.services.business_service import BusinessService
from ..schemas.business_schemas import BusinessCreateRequest, BusinessStatus, BusinessUpdateRequest

logger = logging.getLogger(__name__)

businesses_router = APIRouter()


def get_business_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> BusinessService:
    return BusinessService(db, notifier)


@businesses_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create business",
    responses={
        201: {"description": "Business created"},
        403: {"description": "Creating for another user, or contact owned by someone else"},
        404: {"description": "User or messaging contact not found"},
    },
)
async def create_business(
    payload: BusinessCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: BusinessService = Depends(get_business_service),
):
    business = await service.create_business(payload.model_dump(), current_user)
    return success_response("Business created successfully", business, status.HTTP_201_CREATED)


@businesses_router.get("", summary="List businesses")
async def list_businesses(
    params: QueryParams = Depends(get_list_params),
    user_id: Optional[str] = Query(None, alias="userId"),
    business_status: Optional[BusinessStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    service: BusinessService = Depends(get_business_service),
):
    result = await service.list_businesses(
        params, current_user, parse_optional_uuid(user_id, "user"), business_status
    )
    return success_response("Businesses fetched successfully", result)


@businesses_router.get("/{business_id}", summary="Get business")
async def get_business(
    business_id: str,
    depth: int = Depends(get_depth_param),
    service: BusinessService = Depends(get_business_service),
):
    business = await service.get_business(parse_uuid(business_id, "business"), depth)
    return success_response("Business fetched successfully", business)


@businesses_router.patch("/{business_id}", summary="Update business")
async def update_business(
    business_id: str,
    payload: BusinessUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: BusinessService = Depends(get_business_service),
):
    business = await service.update_business(parse_uuid(business_id, "business"), payload.changes(), current_user)
    return success_response("Business updated successfully", business)


@businesses_router.delete("/{business_id}", summary="Delete business")
async def delete_business(
    business_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: BusinessService = Depends(get_business_service),
):
    await service.delete_business(parse_uuid(business_id, "business"), current_user)
    return success_response("Business deleted successfully")
