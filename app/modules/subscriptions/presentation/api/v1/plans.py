# 📄 File: app/modules/subscriptions/presentation/api/v1/plans.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for browsing subscription plans (open to everyone) and for
# admins to create, change and remove them.
# 🧪 Purpose (Technical Summary):
# FastAPI SubscriptionPlan endpoints: public reads, admin-only writes.
# 🔗 Dependencies:
# FastAPI router, SubscriptionPlanService, plan_schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (mounted at /subscription-plans)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.presentation.dependencies import get_current_admin_user
from app.shared.core.dependencies import CurrentUser, get_notifier
from app.shared.core.responses import success_response
from app.shared.events.notifier import EventNotifier
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import parse_uuid
from app.shared.utils.query import QueryParams, get_list_params

from ....domain.services.subscription_plan_service import SubscriptionPlanService
from ..schemas.plan_schemas import (
    AnalysisType,
    PlanStatus,
    SubscriptionPlanCreateRequest,
    SubscriptionPlanUpdateRequest,
)

logger = logging.getLogger(__name__)

plans_router = APIRouter()


def get_plan_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> SubscriptionPlanService:
    return SubscriptionPlanService(db, notifier)


@plans_router.post("", status_code=status.HTTP_201_CREATED, summary="Create subscription plan (admin)")
async def create_plan(
    payload: SubscriptionPlanCreateRequest,
    _: CurrentUser = Depends(get_current_admin_user),
    service: SubscriptionPlanService = Depends(get_plan_service),
):
    plan = await service.create_plan(payload.model_dump())
    return success_response("Subscription plan created successfully", plan, status.HTTP_201_CREATED)


@plans_router.get("", summary="List subscription plans")
async def list_plans(
    params: QueryParams = Depends(get_list_params),
    plan_status: Optional[PlanStatus] = Query(None, alias="status"),
    analysis_type: Optional[AnalysisType] = Query(None, alias="analysisType"),
    service: SubscriptionPlanService = Depends(get_plan_service),
):
    result = await service.list_plans(params, plan_status, analysis_type)
    return success_response("Subscription plans fetched successfully", result)


@plans_router.get("/{plan_id}", summary="Get subscription plan")
async def get_plan(plan_id: str, service: SubscriptionPlanService = Depends(get_plan_service)):
    plan = await service.get_plan(parse_uuid(plan_id, "subscription plan"))
    return success_response("Subscription plan fetched successfully", plan)


@plans_router.patch("/{plan_id}", summary="Update subscription plan (admin)")
async def update_plan(
    plan_id: str,
    payload: SubscriptionPlanUpdateRequest,
    _: CurrentUser = Depends(get_current_admin_user),
    service: SubscriptionPlanService = Depends(get_plan_service),
):
    plan = await service.update_plan(parse_uuid(plan_id, "subscription plan"), payload.changes())
    return success_response("Subscription plan updated successfully", plan)


@plans_router.delete("/{plan_id}", summary="Delete subscription plan (admin)")
async def delete_plan(
    plan_id: str,
    _: CurrentUser = Depends(get_current_admin_user),
    service: SubscriptionPlanService = Depends(get_plan_service),
):
    await service.delete_plan(parse_uuid(plan_id, "subscription plan"))
    return success_response("Subscription plan deleted successfully")
