# 📄 File: app/modules/catalog/presentation/api/schemas/business_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a client sends to register or change a business.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for business endpoints; every descriptive field is
# required on create, all are optional on update.
# 🔗 Dependencies:
# pydantic, app.shared.core.schemas
# 🔄 Connected Modules / Calls From:
# app.modules.catalog.presentation.api.v1.businesses

from typing import Literal, Optional

from pydantic import Field

from app.shared.core.schemas import CamelModel

BusinessStatus = Literal["active", "inactive", "pending"]


class BusinessCreateRequest(CamelModel):
    """
    Business creation payload.

    ``userId`` defaults to the caller; ``messagingContactId`` must name a
    contact owned by that same user.
    """

    user_id: Optional[str] = None
    messaging_contact_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200, examples=["Corner Cafe"])
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=255)
    logo: str = Field(..., min_length=1, max_length=500)
    image: str = Field(..., min_length=1, max_length=500)
    status: BusinessStatus = "active"


class BusinessUpdateRequest(CamelModel):
    messaging_contact_id: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    logo: Optional[str] = Field(default=None, min_length=1, max_length=500)
    image: Optional[str] = Field(default=None, min_length=1, max_length=500)
    status: Optional[BusinessStatus] = None
