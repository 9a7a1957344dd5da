# 📄 File: app/modules/catalog/presentation/api/schemas/item_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a client sends to add or change a menu item, including its price
# and labels.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for item endpoints with non-negative price and tag
# de-duplication. ``businessId`` is deliberately absent: it follows the category.
# 🔗 Dependencies:
# pydantic, app.shared.core.schemas
# 🔄 Connected Modules / Calls From:
# app.modules.catalog.presentation.api.v1.items

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from app.shared.core.schemas import CamelModel

ItemStatus = Literal["active", "inactive"]


def _distinct_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    seen = []
    for tag in tags:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class ItemCreateRequest(CamelModel):
    category_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200, examples=["Espresso"])
    description: Optional[str] = None
    price: float = Field(..., ge=0, examples=[3.5])
    image: str = Field(..., min_length=1, max_length=500)
    meta: Optional[Dict[str, Any]] = None
    tags: List[str] = Field(default_factory=list)
    status: ItemStatus = "active"

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        return _distinct_tags(v)


class ItemUpdateRequest(CamelModel):
    """Changing ``categoryId`` re-derives the item's business."""

    category_id: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    image: Optional[str] = Field(default=None, min_length=1, max_length=500)
    meta: Optional[Dict[str, Any]] = None
    tags: Optional[List[str]] = None
    status: Optional[ItemStatus] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _distinct_tags(v)
