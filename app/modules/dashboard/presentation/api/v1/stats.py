"""
Dashboard API Endpoints

- GET /stats: aggregate counts, optionally scoped by userId and businessId
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.modules.user_management.presentation.dependencies import get_current_user
from app.shared.core.dependencies import CurrentUser
from app.shared.core.responses import success_response
from app.shared.utils.helpers import parse_optional_uuid

from ....domain.services.stats_service import DashboardStatsService

dashboard_router = APIRouter()


@dashboard_router.get("/stats", summary="Dashboard statistics")
async def get_dashboard_stats(
    user_id: Optional[str] = Query(None, alias="userId"),
    business_id: Optional[str] = Query(None, alias="businessId"),
    current_user: CurrentUser = Depends(get_current_user),
):
    stats = await DashboardStatsService().get_stats(
        current_user,
        user_id=parse_optional_uuid(user_id, "user"),
        business_id=parse_optional_uuid(business_id, "business"),
    )
    return success_response("Dashboard stats fetched successfully", stats)
