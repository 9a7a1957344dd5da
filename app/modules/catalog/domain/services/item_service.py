# 📄 File: app/modules/catalog/domain/services/item_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for menu items: an item always sits in one section of one business,
# and moving it between sections keeps track of which business it belongs to.
#
# 🧪 Purpose (Technical Summary):
# Domain service for Item CRUD. ``business_id`` is derived from the category on
# create and on category change; every write is owner-or-admin on the business
# (both the current and the target business when moving).
#
# 🔗 Dependencies:
# - BaseRepository, populate
# - business_service.get_managed_business
# - app.shared.utils.query.escape_like, connection.json_serializer (tag filter)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.catalog.presentation.api.v1.items

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import String, cast
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.connection import json_serializer
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.helpers import parse_uuid
from app.shared.utils.query import QueryParams, escape_like

from ...infrastructure.database.models import CategoryModel, ItemModel
from ...infrastructure.database.relations import ITEM_RELATIONS
from .business_service import get_managed_business

logger = logging.getLogger(__name__)


class ItemService:
    """
    Domain service for item management business logic.
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.items = BaseRepository(session, ItemModel, "Item")
        self.categories = BaseRepository(session, CategoryModel, "Category")
        self.notifier = notifier or NullNotifier()

    async def expand(self, item: ItemModel, depth: int = 1) -> Dict[str, Any]:
        return await populate_one(self.session, item.to_dict(), ITEM_RELATIONS, depth)

    async def _managed_category(self, raw_category_id: Any, current_user: CurrentUser) -> CategoryModel:
        """Load a category and require management rights on its business."""
        category_id = parse_uuid(raw_category_id, "category")
        category = await self.categories.get_or_404(category_id, "Category not found")
        await get_managed_business(self.session, category.business_id, current_user)
        return category

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_item(self, data: Dict[str, Any], current_user: CurrentUser) -> Dict[str, Any]:
        category = await self._managed_category(data["category_id"], current_user)

        item = self.items.add(ItemModel(
            category_id=category.id,
            business_id=category.business_id,
            name=data["name"],
            description=data.get("description"),
            price=data["price"],
            image=data["image"],
            meta=data.get("meta"),
            tags=data.get("tags") or [],
            status=data.get("status") or "active",
        ))
        await self.items.commit()
        await self.items.refresh(item)

        logger.info(f"Created item {item.id} in category {category.id}")
        document = await self.expand(item)
        self.notifier.broadcast("itemCreated", document)
        return document

    async def list_items(
        self,
        params: QueryParams,
        business_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        status: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List items, optionally filtered.

        ``tag`` matches items carrying that exact tag (case-insensitive).
        """
        filters = []
        if business_id is not None:
            filters.append(ItemModel.business_id == business_id)
        if category_id is not None:
            filters.append(ItemModel.category_id == category_id)
        if status:
            filters.append(ItemModel.status == status)
        if tag:
            # Tags are stored as a JSON array, so match the tag exactly as it is serialized
            pattern = f"%{escape_like(json_serializer(tag.strip()))}%"
            filters.append(cast(ItemModel.tags, String).ilike(pattern, escape="\\"))

        records, total = await self.items.paginate(params, filters)
        documents = await populate(self.session, [r.to_dict() for r in records], ITEM_RELATIONS, params.depth)
        return page_payload(total, params.page, params.limit, documents)

    async def get_item(self, item_id: UUID, depth: int = 1) -> Dict[str, Any]:
        item = await self.items.get_or_404(item_id, "Item not found")
        return await self.expand(item, depth)

    async def update_item(
        self,
        item_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        item = await self.items.get_or_404(item_id, "Item not found")
        await get_managed_business(self.session, item.business_id, current_user)

        if changes.get("category_id"):
            category = await self._managed_category(changes["category_id"], current_user)
            item.category_id = category.id
            item.business_id = category.business_id

        for field in ("name", "image", "status"):
            if changes.get(field):
                setattr(item, field, changes[field])
        if changes.get("price") is not None:
            item.price = changes["price"]
        for field in ("description", "meta"):
            if field in changes:
                setattr(item, field, changes[field])
        if changes.get("tags") is not None:
            item.tags = changes["tags"]

        await self.items.commit()
        await self.items.refresh(item)

        logger.info(f"Updated item {item.id}")
        document = await self.expand(item)
        self.notifier.broadcast("itemUpdated", document)
        return document

    async def delete_item(self, item_id: UUID, current_user: CurrentUser) -> None:
        item = await self.items.get_or_404(item_id, "Item not found")
        await get_managed_business(self.session, item.business_id, current_user)

        await self.items.delete(item)
        await self.items.commit()

        logger.info(f"Deleted item {item_id}")
        self.notifier.broadcast("itemDeleted", {"id": item_id})
