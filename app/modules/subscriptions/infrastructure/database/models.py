# 📄 File: app/modules/subscriptions/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how subscription plans and each person's subscriptions are stored, and
# makes sure nobody ends up with two active plans at once.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for SubscriptionPlan (case-insensitive unique name/slug,
# JSON feature list) and UserSubscriptionPlan (partial unique index on active rows).
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (Base, TimestampMixin)
#
# 🔄 Connected Modules / Calls From:
# - subscription_plan_service.py, user_subscription_service.py
# - Database migration scripts (schema generation)

from typing import Any, Dict

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Uuid, func, text

from app.shared.infrastructure.database.connection import Base, TimestampMixin

PLAN_STATUSES = ("active", "inactive")
ANALYSIS_TYPES = ("basic", "advanced")
SUBSCRIPTION_STATUSES = ("active", "expired", "cancelled")


# =============================================================================
# SUBSCRIPTION PLAN MODEL
# =============================================================================

class SubscriptionPlanModel(TimestampMixin, Base):
    """
    SQLAlchemy model for subscription plans.

    ``duration`` is in months; the ``max_*`` columns are plan quotas.
    """
    __tablename__ = "subscription_plans"

    name = Column(String(100), nullable=False)
    slug = Column(String(120), nullable=False, comment="Derived from name")
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    duration = Column(Integer, nullable=False, comment="Months")
    feature = Column(JSON, nullable=False, default=list, comment="Feature bullet points")
    max_business = Column(Integer, nullable=False)
    max_category = Column(Integer, nullable=False)
    max_item = Column(Integer, nullable=False)
    analysis_type = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="active")

    SEARCH_FIELDS = ("name", "slug")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "price": "price",
        "duration": "duration",
        "status": "status",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "price": self.price,
            "duration": self.duration,
            "feature": list(self.feature or []),
            "maxBusiness": self.max_business,
            "maxCategory": self.max_category,
            "maxItem": self.max_item,
            "analysisType": self.analysis_type,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<SubscriptionPlanModel(id={self.id}, slug={self.slug})>"


# =============================================================================
# USER SUBSCRIPTION PLAN MODEL
# =============================================================================

class UserSubscriptionPlanModel(TimestampMixin, Base):
    """
    A user's subscription to a plan.

    ``end_date`` is always ``start_date`` plus the plan's duration in months.
    """
    __tablename__ = "user_subscription_plans"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    subscription_plan_id = Column(
        Uuid,
        ForeignKey("subscription_plans.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="active")

    SEARCH_FIELDS = ("status",)
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "startDate": "start_date",
        "endDate": "end_date",
        "status": "status",
    }

    __table_args__ = (
        Index(
            "uq_user_subscription_plans_active_user",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "subscriptionPlanId": self.subscription_plan_id,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<UserSubscriptionPlanModel(id={self.id}, user_id={self.user_id}, status={self.status})>"


Index("uq_subscription_plans_name_lower", func.lower(SubscriptionPlanModel.__table__.c.name), unique=True)
Index("uq_subscription_plans_slug_lower", func.lower(SubscriptionPlanModel.__table__.c.slug), unique=True)
