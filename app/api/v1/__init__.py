# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups version 1 of the menu service's web addresses so a later version can be
# added without breaking existing apps.
# 🧪 Purpose (Technical Summary):
# Package initialization for API version 1: version metadata and the route prefixes
# each module router is mounted under.
# 🔗 Dependencies:
# typing
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main

"""
Menu Management API Version 1

Structure:
    v1/
    ├── __init__.py   # This file
    ├── router.py     # Module router aggregation
    ├── health.py     # Health check endpoint
    └── realtime.py   # WebSocket channel and status
"""

from typing import Any, Dict

__version__ = "1.0.0"
__api_version__ = "v1"

# Mount points under the API prefix
ROUTE_PREFIXES: Dict[str, str] = {
    "auth": "/auth",
    "roles": "/roles",
    "users": "/users",
    "messaging_contacts": "/messaging-contacts",
    "businesses": "/businesses",
    "categories": "/categories",
    "items": "/items",
    "subscription_plans": "/subscription-plans",
    "user_subscription_plans": "/user-subscription-plans",
    "orders": "/orders",
    "dashboard": "/dashboard",
    "realtime": "/realtime",
}

API_TAGS: Dict[str, str] = {
    "auth": "Authentication",
    "roles": "Roles",
    "users": "Users",
    "messaging_contacts": "Messaging Contacts",
    "businesses": "Businesses",
    "categories": "Categories",
    "items": "Items",
    "subscription_plans": "Subscription Plans",
    "user_subscription_plans": "User Subscription Plans",
    "orders": "Orders",
    "dashboard": "Dashboard",
    "realtime": "Real-time",
}


def get_api_info() -> Dict[str, Any]:
    """Version details and available resources."""
    return {
        "version": __version__,
        "apiVersion": __api_version__,
        "resources": sorted(ROUTE_PREFIXES.values()),
    }
