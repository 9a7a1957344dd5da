"""
Request schemas for category endpoints.
"""

from typing import Literal, Optional

from pydantic import Field

from app.shared.core.schemas import CamelModel

CategoryStatus = Literal["active", "inactive"]


class CategoryCreateRequest(CamelModel):
    business_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=150, examples=["Electronics"])
    description: Optional[str] = None
    status: CategoryStatus = "active"


class CategoryUpdateRequest(CamelModel):
    """The owning business is fixed at creation."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None
    status: Optional[CategoryStatus] = None
