# 📄 File: app/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a client may send when changing a user account.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request schema for user updates with username pattern, email format
# and password length validation.
#
# 🔗 Dependencies:
# - pydantic (EmailStr via email-validator)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.users
# - app.modules.user_management.presentation.api.schemas.auth_schemas (shared constraints)

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.shared.core.schemas import CamelModel

USERNAME_PATTERN = r"^[a-z0-9_.-]+$"
PASSWORD_MIN_LENGTH = 8


class UserUpdateRequest(CamelModel):
    """
    Partial user update.

    ``roleId`` is accepted here but only honoured for admin callers.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    username: Optional[str] = Field(default=None, min_length=1, max_length=100, pattern=USERNAME_PATTERN)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=PASSWORD_MIN_LENGTH, max_length=128)
    phone_number: Optional[str] = Field(default=None, max_length=50)
    role_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate email format and normalize to lowercase."""
        return v.lower() if v else v
