# 📄 File: app/modules/subscriptions/presentation/api/schemas/plan_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what an admin sends to create or change a subscription plan, and what
# a person sends to subscribe to one.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for plan and user-subscription endpoints with range
# checks on price, duration and quotas.
# 🔗 Dependencies:
# pydantic, app.shared.core.schemas
# 🔄 Connected Modules / Calls From:
# app.modules.subscriptions.presentation.api.v1.plans, user_subscriptions

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from app.shared.core.schemas import CamelModel

PlanStatus = Literal["active", "inactive"]
AnalysisType = Literal["basic", "advanced"]
SubscriptionStatus = Literal["active", "expired", "cancelled"]


class SubscriptionPlanCreateRequest(CamelModel):
    """Subscription plan payload; the slug is derived from ``name``."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Premium"])
    price: float = Field(..., ge=0)
    duration: int = Field(..., gt=0, description="Months")
    feature: List[str] = Field(..., description="Feature bullet points")
    max_business: int = Field(..., ge=1)
    max_category: int = Field(..., ge=1)
    max_item: int = Field(..., ge=1)
    analysis_type: AnalysisType
    status: PlanStatus = "active"


class SubscriptionPlanUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, gt=0)
    feature: Optional[List[str]] = None
    max_business: Optional[int] = Field(default=None, ge=1)
    max_category: Optional[int] = Field(default=None, ge=1)
    max_item: Optional[int] = Field(default=None, ge=1)
    analysis_type: Optional[AnalysisType] = None
    status: Optional[PlanStatus] = None


class UserSubscriptionCreateRequest(CamelModel):
    """
    ``userId`` defaults to the caller (admins may name anyone).
    ``startDate`` defaults to now.
    """

    user_id: Optional[str] = None
    subscription_plan_id: str = Field(..., min_length=1)
    start_date: Optional[datetime] = Field(default=None, examples=["2025-02-01"])
    status: SubscriptionStatus = "active"


class UserSubscriptionUpdateRequest(CamelModel):
    """Changing the plan or the start date re-derives ``endDate``."""

    subscription_plan_id: Optional[str] = None
    start_date: Optional[datetime] = None
    status: Optional[SubscriptionStatus] = None
