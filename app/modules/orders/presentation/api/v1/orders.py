# 📄 File: app/modules/orders/presentation/api/v1/orders.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for placing orders with a business and for its owner to see,
# update and remove them.
# 🧪 Purpose (Technical Summary):
# FastAPI Order endpoints; all authenticated and owner-or-admin through the Business.
# 🔗 Dependencies:
# FastAPI router, OrderService, order_schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (mounted at /orders)

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

from ....domain.services.order_service import OrderService
from ..schemas.order_schemas import OrderCreateRequest, OrderStatus, OrderUpdateRequest

logger = logging.getLogger(__name__)

orders_router = APIRouter()


def get_order_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> OrderService:
    return OrderService(db, notifier)


@orders_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    responses={
        400: {"description": "Malformed id, empty lines, or item of another business"},
        403: {"description": "Caller does not manage the business"},
        404: {"description": "Business or item not found"},
    },
)
async def create_order(
    payload: OrderCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = await service.create_order(payload.model_dump(), current_user)
    return success_response("Order created successfully", order, status.HTTP_201_CREATED)


@orders_router.get("", summary="List orders")
async def list_orders(
    params: QueryParams = Depends(get_list_params),
    business_id: Optional[str] = Query(None, alias="businessId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    result = await service.list_orders(
        params,
        current_user,
        business_id=parse_optional_uuid(business_id, "business"),
        user_id=parse_optional_uuid(user_id, "user"),
        status=order_status,
    )
    return success_response("Orders fetched successfully", result)


@orders_router.get("/{order_id}", summary="Get order")
async def get_order(
    order_id: str,
    depth: int = Depends(get_depth_param),
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = await service.get_order(parse_uuid(order_id, "order"), current_user, depth)
    return success_response("Order fetched successfully", order)


@orders_router.patch("/{order_id}", summary="Update order")
async def update_order(
    order_id: str,
    payload: OrderUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = await service.update_order(parse_uuid(order_id, "order"), payload.changes(), current_user)
    return success_response("Order updated successfully", order)


@orders_router.delete("/{order_id}", summary="Delete order")
async def delete_order(
    order_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    await service.delete_order(parse_uuid(order_id, "order"), current_user)
    return success_response("Order deleted successfully")
