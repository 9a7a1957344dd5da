"""
Relationship expansion maps for subscription documents.
"""

from app.modules.user_management.infrastructure.database.relations import USER_CONTACT, user_reference
from app.shared.infrastructure.database.populate import Relation

from .models import SubscriptionPlanModel

PLAN_BRIEF = ("id", "name", "price", "duration")

USER_SUBSCRIPTION_RELATIONS = {
    "userId": user_reference(USER_CONTACT),
    "subscriptionPlanId": Relation(SubscriptionPlanModel, PLAN_BRIEF),
}
