# 📄 File: app/modules/subscriptions/domain/services/user_subscription_service.py
# 🧭 Purpose (Layman Explanation):
# Signs people up to plans, works out when each subscription ends, and makes sure
# nobody has two active plans at the same time.
#
# 🧪 Purpose (Technical Summary):
# Domain service for UserSubscriptionPlan CRUD: endDate = startDate + plan.duration
# calendar months (re-derived when plan or start change), single-active-per-user
# check backed by a partial unique index, owner-or-admin access.
#
# 🔗 Dependencies:
# - BaseRepository, populate
# - app.shared.utils.helpers.add_months
# - app.modules.user_management (resolve_owner_id)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.subscriptions.presentation.api.v1.user_subscriptions

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.services.user_service import resolve_owner_id
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import DuplicateResourceError
from app.shared.core.permissions import require_owner_or_admin, scoped_user_filter
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.helpers import add_months, parse_uuid
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import SubscriptionPlanModel, UserSubscriptionPlanModel
from ...infrastructure.database.relations import USER_SUBSCRIPTION_RELATIONS

logger = logging.getLogger(__name__)

ACTIVE_CONFLICT_MESSAGE = "User already has an active subscription plan"


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps from clients are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserSubscriptionService:
    """
    Domain service for user subscription business logic.

    Business rules:
    - ``end_date`` is derived, never supplied
    - At most one ``active`` subscription per user
    - Non-admins only see and manage their own subscriptions
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.subscriptions = BaseRepository(session, UserSubscriptionPlanModel, "User subscription plan")
        self.plans = BaseRepository(session, SubscriptionPlanModel, "Subscription plan")
        self.notifier = notifier or NullNotifier()

    async def expand(self, subscription: UserSubscriptionPlanModel, depth: int = 1) -> Dict[str, Any]:
        return await populate_one(self.session, subscription.to_dict(), USER_SUBSCRIPTION_RELATIONS, depth)

    async def _load_plan(self, raw_plan_id: Any) -> SubscriptionPlanModel:
        plan_id = parse_uuid(raw_plan_id, "subscription plan")
        return await self.plans.get_or_404(plan_id, "Subscription plan not found")

    async def _ensure_no_other_active(self, user_id: UUID, exclude_id: Optional[UUID] = None) -> None:
        conditions = [
            UserSubscriptionPlanModel.user_id == user_id,
            UserSubscriptionPlanModel.status == "active",
        ]
        if exclude_id is not None:
            conditions.append(UserSubscriptionPlanModel.id != exclude_id)
        if await self.subscriptions.find_one(*conditions):
            raise DuplicateResourceError(
                ACTIVE_CONFLICT_MESSAGE,
                resource_type="user subscription plan",
                field="status",
            )

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_subscription(self, data: Dict[str, Any], current_user: CurrentUser) -> Dict[str, Any]:
        """
        Subscribe a user to a plan.

        Raises:
            ValidationError: Malformed user or plan id
            AuthorizationError: A non-admin subscribing someone else
            NotFoundError: Unknown user or plan
            DuplicateResourceError: The user already has an active subscription
        """
        user_id = await resolve_owner_id(self.session, current_user, data.get("user_id"))
        plan = await self._load_plan(data["subscription_plan_id"])

        status = data.get("status") or "active"
        if status == "active":
            await self._ensure_no_other_active(user_id)

        start_date = _as_utc(data.get("start_date") or datetime.now(timezone.utc))
        subscription = self.subscriptions.add(UserSubscriptionPlanModel(
            user_id=user_id,
            subscription_plan_id=plan.id,
            start_date=start_date,
            end_date=add_months(start_date, plan.duration),
            status=status,
        ))
        await self.subscriptions.commit(ACTIVE_CONFLICT_MESSAGE)
        await self.subscriptions.refresh(subscription)

        logger.info(f"Subscribed user {user_id} to plan {plan.id} until {subscription.end_date}")
        document = await self.expand(subscription)
        self.notifier.broadcast("userSubscriptionPlanCreated", document)
        return document

    async def list_subscriptions(
        self,
        params: QueryParams,
        current_user: CurrentUser,
        user_id: Optional[UUID] = None,
        plan_id: Optional[UUID] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        filters = []
        owner_id = scoped_user_filter(current_user, user_id)
        if owner_id is not None:
            filters.append(UserSubscriptionPlanModel.user_id == owner_id)
        if plan_id is not None:
            filters.append(UserSubscriptionPlanModel.subscription_plan_id == plan_id)
        if status:
            filters.append(UserSubscriptionPlanModel.status == status)

        records, total = await self.subscriptions.paginate(params, filters)
        documents = await populate(
            self.session, [r.to_dict() for r in records], USER_SUBSCRIPTION_RELATIONS, params.depth
        )
        return page_payload(total, params.page, params.limit, documents)

    async def _load_owned(self, subscription_id: UUID, current_user: CurrentUser) -> UserSubscriptionPlanModel:
        subscription = await self.subscriptions.get_or_404(subscription_id, "User subscription plan not found")
        require_owner_or_admin(current_user, subscription.user_id, "user subscription plan", subscription.id)
        return subscription

    async def get_subscription(self, subscription_id: UUID, current_user: CurrentUser) -> Dict[str, Any]:
        return await self.expand(await self._load_owned(subscription_id, current_user))

    async def update_subscription(
        self,
        subscription_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        subscription = await self._load_owned(subscription_id, current_user)

        plan_changed = False
        if changes.get("subscription_plan_id"):
            plan = await self._load_plan(changes["subscription_plan_id"])
            plan_changed = plan.id != subscription.subscription_plan_id
            subscription.subscription_plan_id = plan.id
        else:
            plan = await self.plans.get_or_404(subscription.subscription_plan_id, "Subscription plan not found")

        start_changed = False
        if changes.get("start_date"):
            subscription.start_date = _as_utc(changes["start_date"])
            start_changed = True

        if plan_changed or start_changed:
            subscription.end_date = add_months(subscription.start_date, plan.duration)

        new_status = changes.get("status")
        if new_status:
            if new_status == "active" and subscription.status != "active":
                await self._ensure_no_other_active(subscription.user_id, exclude_id=subscription.id)
            subscription.status = new_status

        await self.subscriptions.commit(ACTIVE_CONFLICT_MESSAGE)
        await self.subscriptions.refresh(subscription)

        logger.info(f"Updated user subscription plan {subscription.id}")
        document = await self.expand(subscription)
        self.notifier.broadcast("userSubscriptionPlanUpdated", document)
        return document

    async def delete_subscription(self, subscription_id: UUID, current_user: CurrentUser) -> None:
        subscription = await self._load_owned(subscription_id, current_user)

        await self.subscriptions.delete(subscription)
        await self.subscriptions.commit()

        logger.info(f"Deleted user subscription plan {subscription_id}")
        self.notifier.broadcast("userSubscriptionPlanDeleted", {"id": subscription_id})
