"""
Categories API Endpoints

Reads are public; writes require ownership of the parent business (or admin).
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

from ....domain.services.category_service import CategoryService
from ..schemas.category_schemas import CategoryCreateRequest, CategoryStatus, CategoryUpdateRequest

logger = logging.getLogger(__name__)

categories_router = APIRouter()


def get_category_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> CategoryService:
    return CategoryService(db, notifier)


@categories_router.post("", status_code=status.HTTP_201_CREATED, summary="Create category")
async def create_category(
    payload: CategoryCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.create_category(payload.model_dump(), current_user)
    return success_response("Category created successfully", category, status.HTTP_201_CREATED)


@categories_router.get("", summary="List categories")
async def list_categories(
    params: QueryParams = Depends(get_list_params),
    business_id: Optional[str] = Query(None, alias="businessId"),
    category_status: Optional[CategoryStatus] = Query(None, alias="status"),
    service: CategoryService = Depends(get_category_service),
):
    result = await service.list_categories(params, parse_optional_uuid(business_id, "business"), category_status)
    return success_response("Categories fetched successfully", result)


@categories_router.get("/{category_id}", summary="Get category")
async def get_category(
    category_id: str,
    depth: int = Depends(get_depth_param),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.get_category(parse_uuid(category_id, "category"), depth)
    return success_response("Category fetched successfully", category)


@categories_router.patch("/{category_id}", summary="Update category")
async def update_category(
    category_id: str,
    payload: CategoryUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
):
    category = await service.update_category(parse_uuid(category_id, "category"), payload.changes(), current_user)
    return success_response("Category updated successfully", category)


@categories_router.delete("/{category_id}", summary="Delete category")
async def delete_category(
    category_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
):
    await service.delete_category(parse_uuid(category_id, "category"), current_user)
    return success_response("Category deleted successfully")
