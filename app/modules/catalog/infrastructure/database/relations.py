"""
Relationship expansion maps for catalog documents.

At depth 2 a category's or item's business expands its owner too.
"""

from app.modules.user_management.infrastructure.database.relations import (
    USER_BRIEF,
    USER_CONTACT,
    user_reference,
)
from app.shared.infrastructure.database.populate import Relation

from .models import BusinessModel, CategoryModel, ItemModel, MessagingContactModel

CONTACT_BRIEF = ("id", "name", "username", "phoneNumber")
BUSINESS_BRIEF = ("id", "name", "userId")
CATEGORY_BRIEF = ("id", "name", "slug")
ITEM_BRIEF = ("id", "name", "price")

BUSINESS_REFERENCE = Relation(BusinessModel, BUSINESS_BRIEF, nested={"userId": user_reference(USER_BRIEF)})

MESSAGING_CONTACT_RELATIONS = {
    "userId": user_reference(USER_BRIEF),
}

BUSINESS_RELATIONS = {
    "userId": user_reference(USER_CONTACT),
    "messagingContactId": Relation(MessagingContactModel, CONTACT_BRIEF),
}

CATEGORY_RELATIONS = {
    "businessId": BUSINESS_REFERENCE,
}

ITEM_RELATIONS = {
    "categoryId": Relation(CategoryModel, CATEGORY_BRIEF),
    "businessId": BUSINESS_REFERENCE,
}


def item_reference(fields=ITEM_BRIEF) -> Relation:
    """Relation used by other modules pointing at an item."""
    return Relation(ItemModel, fields)
