# 📄 File: app/modules/catalog/domain/services/category_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for menu sections: each business can name its sections however it likes,
# but never twice, and only the business owner (or an admin) may change them.
# 🧪 Purpose (Technical Summary):
# Domain service for Category CRUD with per-business case-insensitive name/slug
# uniqueness, slug re-derivation on rename and ownership via the parent Business.
# 🔗 Dependencies:
# BaseRepository, get_managed_business, slugify, populate, EventNotifier
# 🔄 Connected Modules / Calls From:
# app.modules.catalog.presentation.api.v1.categories, item_service.py

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import DuplicateResourceError
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.helpers import parse_uuid, slugify
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import CategoryModel
from ...infrastructure.database.relations import CATEGORY_RELATIONS
from .business_service import get_managed_business

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Domain service for category management business logic.
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.categories = BaseRepository(session, CategoryModel, "Category")
        self.notifier = notifier or NullNotifier()

    async def expand(self, category: CategoryModel, depth: int = 1) -> Dict[str, Any]:
        return await populate_one(self.session, category.to_dict(), CATEGORY_RELATIONS, depth)

    async def _ensure_unique(
        self,
        business_id: UUID,
        name: str,
        slug: str,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        """
        Raises:
            DuplicateResourceError: Name or slug already used inside the business (any case)
        """
        scope = [CategoryModel.business_id == business_id]
        if exclude_id is not None:
            scope.append(CategoryModel.id != exclude_id)

        if await self.categories.find_one(*scope, func.lower(CategoryModel.name) == name.lower()):
            raise DuplicateResourceError(
                "Category name already exists for this business",
                resource_type="category",
                field="name",
                value=name,
            )
        if await self.categories.find_one(*scope, func.lower(CategoryModel.slug) == slug.lower()):
            raise DuplicateResourceError(
                "Category slug already exists",
                resource_type="category",
                field="slug",
                value=slug,
            )

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_category(self, data: Dict[str, Any], current_user: CurrentUser) -> Dict[str, Any]:
        business_id = parse_uuid(data["business_id"], "business")
        business = await get_managed_business(self.session, business_id, current_user)

        name = data["name"]
        slug = slugify(name)
        await self._ensure_unique(business.id, name, slug)

        category = self.categories.add(CategoryModel(
            business_id=business.id,
            name=name,
            slug=slug,
            description=data.get("description"),
            status=data.get("status") or "active",
        ))
        await self.categories.commit("Category name already exists for this business")
        await self.categories.refresh(category)

        logger.info(f"Created category {category.id} in business {business.id}")
        document = await self.expand(category)
        self.notifier.broadcast("categoryCreated", document)
        return document

    async def list_categories(
        self,
        params: QueryParams,
        business_id: Optional[UUID] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        filters = []
        if business_id is not None:
            filters.append(CategoryModel.business_id == business_id)
        if status:
            filters.append(CategoryModel.status == status)

        records, total = await self.categories.paginate(params, filters)
        documents = await populate(self.session, [r.to_dict() for r in records], CATEGORY_RELATIONS, params.depth)
        return page_payload(total, params.page, params.limit, documents)

    async def get_category(self, category_id: UUID, depth: int = 1) -> Dict[str, Any]:
        category = await self.categories.get_or_404(category_id, "Category not found")
        return await self.expand(category, depth)

    async def update_category(
        self,
        category_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        category = await self.categories.get_or_404(category_id, "Category not found")
        await get_managed_business(self.session, category.business_id, current_user)

        name = changes.get("name")
        if name and name != category.name:
            slug = slugify(name)
            await self._ensure_unique(category.business_id, name, slug, exclude_id=category.id)
            category.name = name
            category.slug = slug
        if "description" in changes:
            category.description = changes["description"]
        if changes.get("status"):
            category.status = changes["status"]

        await self.categories.commit("Category name already exists for this business")
        await self.categories.refresh(category)

        logger.info(f"Updated category {category.id}")
        document = await self.expand(category)
        self.notifier.broadcast("categoryUpdated", document)
        return document

    async def delete_category(self, category_id: UUID, current_user: CurrentUser) -> None:
        category = await self.categories.get_or_404(category_id, "Category not found")
        await get_managed_business(self.session, category.business_id, current_user)

        await self.categories.delete(category)
        await self.categories.commit()

        logger.info(f"Deleted category {category_id}")
        self.notifier.broadcast("categoryDeleted", {"id": category_id})
