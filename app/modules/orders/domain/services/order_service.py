# 📄 File: app/modules/orders/domain/services/order_service.py
# 🧭 Purpose (Layman Explanation):
# Takes an order for a business, checks every item really is on that business's
# menu, adds up the bill, and lets the business owner follow the order through.
#
# 🧪 Purpose (Technical Summary):
# Domain service for Order CRUD: ownership via get_managed_business, batched line
# item lookup, per-line and order totals computed once at creation, scoped lists
# (non-admins see orders of their own businesses) and mutation events.
#
# 🔗 Dependencies:
# - BaseRepository, populate
# - app.modules.catalog (BusinessModel, ItemModel, get_managed_business)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.orders.presentation.api.v1.orders

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.catalog.domain.services.business_service import get_managed_business
from app.modules.catalog.infrastructure.database.models import BusinessModel, ItemModel
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import NotFoundError, ValidationError
from app.shared.core.permissions import scoped_user_filter
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.helpers import parse_uuid
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import OrderModel
from ...infrastructure.database.relations import ORDER_RELATIONS

logger = logging.getLogger(__name__)


def line_total(unit_price: float, quantity: int) -> float:
    return round(unit_price * quantity, 2)


class OrderService:
    """
    Domain service for order business logic.

    Business rules:
    - Only the business owner (or an admin) records orders for a business
    - Every line item must belong to the ordering business
    - Line and order totals are fixed at creation
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.orders = BaseRepository(session, OrderModel, "Order")
        self.items = BaseRepository(session, ItemModel, "Item")
        self.notifier = notifier or NullNotifier()

    async def expand(self, order: OrderModel, depth: int = 1) -> Dict[str, Any]:
        return await populate_one(self.session, order.to_dict(), ORDER_RELATIONS, depth)

    async def _build_lines(self, business_id: UUID, lines: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Resolve requested lines against the catalog.

        Raises:
            ValidationError: Malformed item id, or an item of another business
            NotFoundError: Unknown item
        """
        item_ids = [parse_uuid(line["item_id"], "item") for line in lines]
        found = {item.id: item for item in await self.items.find_all(ItemModel.id.in_(set(item_ids)))}

        built = []
        for item_id, line in zip(item_ids, lines):
            item = found.get(item_id)
            if item is None:
                raise NotFoundError(message=f"Item not found: {item_id}", resource_type="item", resource_id=str(item_id))
            if item.business_id != business_id:
                raise ValidationError(
                    message=f"Item {item_id} does not belong to this business",
                    field="items",
                    value=item_id,
                )

            unit_price = line.get("unit_price")
            if unit_price is None:
                unit_price = item.price
            quantity = line.get("quantity") or 1
            built.append({
                "itemId": str(item_id),
                "unitPrice": unit_price,
                "quantity": quantity,
                "total": line_total(unit_price, quantity),
            })
        return built

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_order(self, data: Dict[str, Any], current_user: CurrentUser) -> Dict[str, Any]:
        business_id = parse_uuid(data["business_id"], "business")
        business = await get_managed_business(self.session, business_id, current_user)

        lines = await self._build_lines(business.id, data["items"])
        order = self.orders.add(OrderModel(
            business_id=business.id,
            name=data["name"],
            phone=data["phone"],
            address=data["address"],
            items=lines,
            total=round(sum(line["total"] for line in lines), 2),
            note=data.get("note") or "",
            status="pending",
        ))
        await self.orders.commit()
        await self.orders.refresh(order)

        logger.info(f"Created order {order.id} for business {business.id} (total {order.total})")
        document = await self.expand(order)
        self.notifier.broadcast("orderCreated", document)
        return document

    async def list_orders(
        self,
        params: QueryParams,
        current_user: CurrentUser,
        business_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List orders. Non-admins only see orders placed with their own businesses;
        a ``businessId`` outside that set simply yields no rows.
        """
        filters = []
        owner_id = scoped_user_filter(current_user, user_id)
        if owner_id is not None:
            owned = select(BusinessModel.id).where(BusinessModel.user_id == owner_id)
            filters.append(OrderModel.business_id.in_(owned))
        if business_id is not None:
            filters.append(OrderModel.business_id == business_id)
        if status:
            filters.append(OrderModel.status == status)

        records, total = await self.orders.paginate(params, filters)
        documents = await populate(self.session, [r.to_dict() for r in records], ORDER_RELATIONS, params.depth)
        return page_payload(total, params.page, params.limit, documents)

    async def _load_managed(self, order_id: UUID, current_user: CurrentUser) -> OrderModel:
        order = await self.orders.get_or_404(order_id, "Order not found")
        await get_managed_business(self.session, order.business_id, current_user)
        return order

    async def get_order(self, order_id: UUID, current_user: CurrentUser, depth: int = 1) -> Dict[str, Any]:
        return await self.expand(await self._load_managed(order_id, current_user), depth)

    async def update_order(
        self,
        order_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        order = await self._load_managed(order_id, current_user)

        for field in ("name", "phone", "address", "status"):
            if changes.get(field):
                setattr(order, field, changes[field])
        if changes.get("note") is not None:
            order.note = changes["note"]

        await self.orders.commit()
        await self.orders.refresh(order)

        logger.info(f"Updated order {order.id} (status {order.status})")
        document = await self.expand(order)
        self.notifier.broadcast("orderUpdated", document)
        return document

    async def delete_order(self, order_id: UUID, current_user: CurrentUser) -> None:
        order = await self._load_managed(order_id, current_user)

        await self.orders.delete(order)
        await self.orders.commit()

        logger.info(f"Deleted order {order_id}")
        self.notifier.broadcast("orderDeleted", {"id": order_id})
