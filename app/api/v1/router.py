# 📄 File: app/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1: sends business requests to the business
# handlers, order requests to the order handlers, and so on.
# 🧪 Purpose (Technical Summary):
# Aggregates every module router under its v1 prefix and exposes an API info endpoint.
# 🔗 Dependencies:
# FastAPI, every module's presentation.api.v1 routers
# 🔄 Connected Modules / Calls From:
# app.main (mounted at settings.API_PREFIX)

import logging

from fastapi import APIRouter

from app.modules.catalog.presentation.api.v1.businesses import businesses_router
from app.modules.catalog.presentation.api.v1.categories import categories_router
from app.modules.catalog.presentation.api.v1.items import items_router
from app.modules.catalog.presentation.api.v1.messaging_contacts import messaging_contacts_router
from app.modules.dashboard.presentation.api.v1.stats import dashboard_router
from app.modules.orders.presentation.api.v1.orders import orders_router
from app.modules.subscriptions.presentation.api.v1.plans import plans_router
from app.modules.subscriptions.presentation.api.v1.user_subscriptions import user_subscriptions_router
from app.modules.user_management.presentation.api.v1.auth import auth_router
from app.modules.user_management.presentation.api.v1.roles import roles_router
from app.modules.user_management.presentation.api.v1.users import users_router
from app.shared.core.responses import success_response

from . import API_TAGS, ROUTE_PREFIXES, get_api_info
from .realtime import realtime_router

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

_MODULE_ROUTERS = {
    "auth": auth_router,
    "roles": roles_router,
    "users": users_router,
    "messaging_contacts": messaging_contacts_router,
    "businesses": businesses_router,
    "categories": categories_router,
    "items": items_router,
    "subscription_plans": plans_router,
    "user_subscription_plans": user_subscriptions_router,
    "orders": orders_router,
    "dashboard": dashboard_router,
    "realtime": realtime_router,
}

for _name, _router in _MODULE_ROUTERS.items():
    api_v1_router.include_router(_router, prefix=ROUTE_PREFIXES[_name], tags=[API_TAGS[_name]])


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info():
    return success_response("API v1 information", get_api_info())
