# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick "are you alive?" check that load balancers and monitoring tools can call
# to see whether the menu service can still reach its database.
# 🧪 Purpose (Technical Summary):
# Health endpoint running the store's SELECT 1 probe and reporting 200 (healthy)
# or 503 (unhealthy) inside the response envelope.
# 🔗 Dependencies:
# FastAPI, app.shared.infrastructure.database.connection
# 🔄 Connected Modules / Calls From:
# app.main (mounted without prefix), monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status

from app.shared.config.settings import get_settings
from app.shared.core.responses import error_response, success_response
from app.shared.infrastructure.database.connection import database_health_check

logger = logging.getLogger(__name__)

health_router = APIRouter()

# Application start time for uptime calculation
_app_start_time = datetime.now(timezone.utc)


@health_router.get(
    "/health",
    summary="Basic Health Check",
    description="Store reachability check for load balancers and monitoring",
    tags=["Health Check"],
)
async def health_check():
    """
    Report service and database status.

    Returns 503 when the store does not answer ``SELECT 1``.
    """
    settings = get_settings()
    database = await database_health_check()
    payload = {
        "status": database["status"],
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "uptimeSeconds": int((datetime.now(timezone.utc) - _app_start_time).total_seconds()),
        "database": database,
    }

    if database["status"] != "healthy":
        logger.warning(f"Health check failed: {database.get('error')}")
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Service unhealthy", payload)
    return success_response("Service healthy", payload)
