"""
User Subscription Plans API Endpoints

All routes require authentication. Non-admins only ever see and manage
their own subscriptions.
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
from app.shared.utils.query import QueryParams, get_list_params

from ....domain.services.user_subscription_service import UserSubscriptionService
from ..schemas.plan_schemas import (
    SubscriptionStatus,
    UserSubscriptionCreateRequest,
    UserSubscriptionUpdateRequest,
)

logger = logging.getLogger(__name__)

user_subscriptions_router = APIRouter()


def get_user_subscription_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> UserSubscriptionService:
    return UserSubscriptionService(db, notifier)


@user_subscriptions_router.post("", status_code=status.HTTP_201_CREATED, summary="Subscribe to a plan")
async def create_subscription(
    payload: UserSubscriptionCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserSubscriptionService = Depends(get_user_subscription_service),
):
    subscription = await service.create_subscription(payload.model_dump(), current_user)
    return success_response("User subscription plan created successfully", subscription, status.HTTP_201_CREATED)


@user_subscriptions_router.get("", summary="List user subscription plans")
async def list_subscriptions(
    params: QueryParams = Depends(get_list_params),
    user_id: Optional[str] = Query(None, alias="userId"),
    plan_id: Optional[str] = Query(None, alias="subscriptionPlanId"),
    subscription_status: Optional[SubscriptionStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    service: UserSubscriptionService = Depends(get_user_subscription_service),
):
    result = await service.list_subscriptions(
        params,
        current_user,
        user_id=parse_optional_uuid(user_id, "user"),
        plan_id=parse_optional_uuid(plan_id, "subscription plan"),
        status=subscription_status,
    )
    return success_response("User subscription plans fetched successfully", result)


@user_subscriptions_router.get("/{subscription_id}", summary="Get user subscription plan")
async def get_subscription(
    subscription_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserSubscriptionService = Depends(get_user_subscription_service),
):
    subscription = await service.get_subscription(parse_uuid(subscription_id, "user subscription plan"), current_user)
    return success_response("User subscription plan fetched successfully", subscription)


@user_subscriptions_router.patch("/{subscription_id}", summary="Update user subscription plan")
async def update_subscription(
    subscription_id: str,
    payload: UserSubscriptionUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserSubscriptionService = Depends(get_user_subscription_service),
):
    subscription = await service.update_subscription(
        parse_uuid(subscription_id, "user subscription plan"), payload.changes(), current_user
    )
    return success_response("User subscription plan updated successfully", subscription)


@user_subscriptions_router.delete("/{subscription_id}", summary="Delete user subscription plan")
async def delete_subscription(
    subscription_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserSubscriptionService = Depends(get_user_subscription_service),
):
    await service.delete_subscription(parse_uuid(subscription_id, "user subscription plan"), current_user)
    return success_response("User subscription plan deleted successfully")
