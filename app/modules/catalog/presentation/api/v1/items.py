# 📄 File: app/modules/catalog/presentation/api/v1/items.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for browsing menu items and letting business owners add, change
# or remove them.
# 🧪 Purpose (Technical Summary):
# FastAPI Item endpoints: public list/detail with business/category/status/tag filters,
# owner-or-admin writes resolved through the parent Business.
# 🔗 Dependencies:
# FastAPI router, ItemService, item_schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (mounted at /items)

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

from ....domain.services.item_service import ItemService
from ..schemas.item_schemas import ItemCreateRequest, ItemStatus, ItemUpdateRequest

logger = logging.getLogger(__name__)

items_router = APIRouter()


def get_item_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> ItemService:
    return ItemService(db, notifier)


@items_router.post("", status_code=status.HTTP_201_CREATED, summary="Create item")
async def create_item(
    payload: ItemCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: ItemService = Depends(get_item_service),
):
    item = await service.create_item(payload.model_dump(), current_user)
    return success_response("Item created successfully", item, status.HTTP_201_CREATED)


@items_router.get("", summary="List items")
async def list_items(
    params: QueryParams = Depends(get_list_params),
    business_id: Optional[str] = Query(None, alias="businessId"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    item_status: Optional[ItemStatus] = Query(None, alias="status"),
    tag: Optional[str] = Query(None, description="Only items carrying this tag"),
    service: ItemService = Depends(get_item_service),
):
    result = await service.list_items(
        params,
        business_id=parse_optional_uuid(business_id, "business"),
        category_id=parse_optional_uuid(category_id, "category"),
        status=item_status,
        tag=tag,
    )
    return success_response("Items fetched successfully", result)


@items_router.get("/{item_id}", summary="Get item")
async def get_item(
    item_id: str,
    depth: int = Depends(get_depth_param),
    service: ItemService = Depends(get_item_service),
):
    item = await service.get_item(parse_uuid(item_id, "item"), depth)
    return success_response("Item fetched successfully", item)


@items_router.patch("/{item_id}", summary="Update item")
async def update_item(
    item_id: str,
    payload: ItemUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: ItemService = Depends(get_item_service),
):
    item = await service.update_item(parse_uuid(item_id, "item"), payload.changes(), current_user)
    return success_response("Item updated successfully", item)


@items_router.delete("/{item_id}", summary="Delete item")
async def delete_item(
    item_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: ItemService = Depends(get_item_service),
):
    await service.delete_item(parse_uuid(item_id, "item"), current_user)
    return success_response("Item deleted successfully")
