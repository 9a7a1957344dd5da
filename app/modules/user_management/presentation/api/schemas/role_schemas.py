# 📄 File: app/modules/user_management/presentation/api/schemas/role_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a client must send to create or change a role.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for role endpoints; membership of the status enum is
# validated here, uniqueness in the service.
# 🔗 Dependencies:
# pydantic, app.shared.core.schemas
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.presentation.api.v1.roles

from typing import Literal, Optional

from pydantic import Field

from app.shared.core.schemas import CamelModel

RoleStatus = Literal["active", "inactive"]


class RoleCreateRequest(CamelModel):
    """Role creation payload."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Manager"])
    description: Optional[str] = Field(default=None, max_length=1000)
    status: RoleStatus = "active"


class RoleUpdateRequest(CamelModel):
    """Partial role update; only sent fields change."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[RoleStatus] = None
