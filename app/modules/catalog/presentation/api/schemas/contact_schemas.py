# 📄 File: app/modules/catalog/presentation/api/schemas/contact_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a client sends to save or change a chat contact.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for messaging contact endpoints.
# 🔗 Dependencies:
# pydantic, app.shared.core.schemas
# 🔄 Connected Modules / Calls From:
# app.modules.catalog.presentation.api.v1.messaging_contacts

from typing import Literal, Optional

from pydantic import Field

from app.shared.core.schemas import CamelModel

ContactStatus = Literal["active", "inactive"]


class MessagingContactCreateRequest(CamelModel):
    """``userId`` is honoured for admins only; everyone else creates for themselves."""

    user_id: Optional[str] = None
    name: Optional[str] = Field(default=None, max_length=150)
    username: Optional[str] = Field(default=None, max_length=100)
    phone_number: str = Field(..., min_length=1, max_length=50, examples=["+15551234567"])
    status: ContactStatus = "active"


class MessagingContactUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, max_length=150)
    username: Optional[str] = Field(default=None, max_length=100)
    phone_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    status: Optional[ContactStatus] = None
