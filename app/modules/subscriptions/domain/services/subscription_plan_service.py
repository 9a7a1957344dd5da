# 📄 File: app/modules/subscriptions/domain/services/subscription_plan_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for the plans on offer: each needs a unique name, and a plan somebody
# is subscribed to cannot be removed.
# 🧪 Purpose (Technical Summary):
# Domain service for SubscriptionPlan CRUD with slug derivation, case-insensitive
# name/slug uniqueness and a referenced-plan delete guard.
# 🔗 Dependencies:
# BaseRepository, slugify, EventNotifier
# 🔄 Connected Modules / Calls From:
# app.modules.subscriptions.presentation.api.v1.plans, user_subscription_service.py

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.exceptions import DuplicateResourceError
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.utils.helpers import slugify
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import SubscriptionPlanModel, UserSubscriptionPlanModel

logger = logging.getLogger(__name__)

_PLAN_FIELDS = ("price", "duration", "feature", "max_business", "max_category", "max_item", "analysis_type", "status")


class SubscriptionPlanService:
    """
    Domain service for subscription plan business logic.
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.plans = BaseRepository(session, SubscriptionPlanModel, "Subscription plan")
        self.notifier = notifier or NullNotifier()

    async def _ensure_unique(self, name: str, slug: str, exclude_id: Optional[UUID] = None) -> None:
        exclude = [SubscriptionPlanModel.id != exclude_id] if exclude_id is not None else []

        if await self.plans.find_one(*exclude, func.lower(SubscriptionPlanModel.name) == name.lower()):
            raise DuplicateResourceError(
                "Subscription plan name already exists", resource_type="subscription plan", field="name", value=name
            )
        if await self.plans.find_one(*exclude, func.lower(SubscriptionPlanModel.slug) == slug.lower()):
            raise DuplicateResourceError(
                "Subscription plan slug already exists", resource_type="subscription plan", field="slug", value=slug
            )

    async def create_plan(self, data: Dict[str, Any]) -> Dict[str, Any]:
        name = data["name"]
        slug = slugify(name)
        await self._ensure_unique(name, slug)

        plan = self.plans.add(SubscriptionPlanModel(
            name=name,
            slug=slug,
            price=data["price"],
            duration=data["duration"],
            feature=list(data["feature"]),
            max_business=data["max_business"],
            max_category=data["max_category"],
            max_item=data["max_item"],
            analysis_type=data["analysis_type"],
            status=data.get("status") or "active",
        ))
        await self.plans.commit("Subscription plan name already exists")
        await self.plans.refresh(plan)

        logger.info(f"Created subscription plan {plan.id} ({plan.slug})")
        document = plan.to_dict()
        self.notifier.broadcast("subscriptionPlanCreated", document)
        return document

    async def list_plans(
        self,
        params: QueryParams,
        status: Optional[str] = None,
        analysis_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        filters = []
        if status:
            filters.append(SubscriptionPlanModel.status == status)
        if analysis_type:
            filters.append(SubscriptionPlanModel.analysis_type == analysis_type)

        records, total = await self.plans.paginate(params, filters)
        return page_payload(total, params.page, params.limit, [r.to_dict() for r in records])

    async def get_plan(self, plan_id: UUID) -> Dict[str, Any]:
        plan = await self.plans.get_or_404(plan_id, "Subscription plan not found")
        return plan.to_dict()

    async def update_plan(self, plan_id: UUID, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update. Existing subscriptions keep their end dates.
        """
        plan = await self.plans.get_or_404(plan_id, "Subscription plan not found")

        name = changes.get("name")
        if name and name != plan.name:
            slug = slugify(name)
            await self._ensure_unique(name, slug, exclude_id=plan.id)
            plan.name = name
            plan.slug = slug

        for field in _PLAN_FIELDS:
            if changes.get(field) is not None:
                setattr(plan, field, changes[field])

        await self.plans.commit("Subscription plan name already exists")
        await self.plans.refresh(plan)

        logger.info(f"Updated subscription plan {plan.id}")
        document = plan.to_dict()
        self.notifier.broadcast("subscriptionPlanUpdated", document)
        return document

    async def delete_plan(self, plan_id: UUID) -> None:
        """
        Raises:
            NotFoundError: Unknown plan
            DuplicateResourceError: Users are subscribed to the plan
        """
        plan = await self.plans.get_or_404(plan_id, "Subscription plan not found")

        subscribed = await BaseRepository(self.session, UserSubscriptionPlanModel, "User subscription plan").count(
            UserSubscriptionPlanModel.subscription_plan_id == plan.id
        )
        if subscribed:
            raise DuplicateResourceError(
                message="Subscription plan is assigned to existing subscriptions",
                resource_type="subscription plan",
                details={"subscriptions": subscribed},
            )

        await self.plans.delete(plan)
        await self.plans.commit()

        logger.info(f"Deleted subscription plan {plan_id}")
        self.notifier.broadcast("subscriptionPlanDeleted", {"id": plan_id})
