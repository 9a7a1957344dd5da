"""
Relationship expansion maps for order documents.
"""

from app.modules.catalog.infrastructure.database.models import BusinessModel
from app.modules.catalog.infrastructure.database.relations import item_reference
from app.shared.infrastructure.database.populate import Relation

ORDER_RELATIONS = {
    "business": Relation(BusinessModel, ("id", "name", "description")),
    "items.itemId": item_reference(),
}
