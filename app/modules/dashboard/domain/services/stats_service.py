# 📄 File: app/modules/dashboard/domain/services/stats_service.py
# 🧭 Purpose (Layman Explanation):
# Counts users, businesses, categories, items and orders for the overview screen,
# asking the database all five questions at the same time.
#
# 🧪 Purpose (Technical Summary):
# Aggregate statistics read path. The five counts are issued concurrently with
# asyncio.gather, each on its own AsyncSession (a session is not safe for
# concurrent use). A userId scope restricts counts to that user's businesses.
#
# 🔗 Dependencies:
# - asyncio.gather
# - app.shared.infrastructure.database.session.database_session
# - Models from user_management, catalog and orders
#
# 🔄 Connected Modules / Calls From:
# - app.modules.dashboard.presentation.api.v1.stats

import asyncio
import logging
from typing import Any, Dict, List, Optional, Type
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.sql.elements import ColumnElement

from app.modules.catalog.infrastructure.database.models import BusinessModel, CategoryModel, ItemModel
from app.modules.orders.infrastructure.database.models import OrderModel
from app.modules.user_management.infrastructure.database.models import UserModel
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import NotFoundError
from app.shared.core.permissions import scoped_user_filter
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.session import database_session

logger = logging.getLogger(__name__)


async def _count(model: Type[Any], *conditions: ColumnElement) -> int:
    async with database_session() as session:
        return await BaseRepository(session, model, model.__name__).count(*conditions)


class DashboardStatsService:
    """
    Aggregate counts for the dashboard.
    """

    async def get_stats(
        self,
        current_user: CurrentUser,
        user_id: Optional[UUID] = None,
        business_id: Optional[UUID] = None,
    ) -> Dict[str, int]:
        """
        Count users, businesses, categories, items and orders.

        Args:
            current_user: Caller; non-admins are always scoped to themselves
            user_id: Restrict counts to this user's businesses (totalUsers becomes 1)
            business_id: Restrict counts to one business

        Raises:
            AuthorizationError: A non-admin asks for another user's stats
            NotFoundError: ``business_id`` is not one of the scoped user's businesses
        """
        owner_id = scoped_user_filter(current_user, user_id)

        user_filters = []
        business_filters = []
        # Restriction applied to the business_id column of categories, items and orders
        business_scope = None

        if owner_id is not None:
            user_filters.append(UserModel.id == owner_id)
            business_filters.append(BusinessModel.user_id == owner_id)
            business_scope = select(BusinessModel.id).where(BusinessModel.user_id == owner_id)

            if business_id is not None:
                owned = await _count(BusinessModel, BusinessModel.id == business_id, BusinessModel.user_id == owner_id)
                if not owned:
                    raise NotFoundError(
                        message="No business found for given userId and businessId",
                        resource_type="business",
                        resource_id=str(business_id),
                    )

        if business_id is not None:
            business_filters.append(BusinessModel.id == business_id)

        def scoped(model: Type[Any]) -> List[ColumnElement]:
            if business_id is not None:
                return [model.business_id == business_id]
            if business_scope is not None:
                return [model.business_id.in_(business_scope)]
            return []

        total_users, total_businesses, total_categories, total_items, total_orders = await asyncio.gather(
            _count(UserModel, *user_filters),
            _count(BusinessModel, *business_filters),
            _count(CategoryModel, *scoped(CategoryModel)),
            _count(ItemModel, *scoped(ItemModel)),
            _count(OrderModel, *scoped(OrderModel)),
        )

        logger.debug(f"Dashboard stats computed for user={owner_id} business={business_id}")
        return {
            "totalUsers": total_users,
            "totalBusinesses": total_businesses,
            "totalCategories": total_categories,
            "totalItems": total_items,
            "totalOrders": total_orders,
        }
