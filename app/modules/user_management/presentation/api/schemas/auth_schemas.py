# 📄 File: app/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines the data formats for sign-up, sign-in and "sign in with another
# account" requests.
#
# 🧪 Purpose (Technical Summary):
# Pydantic authentication schemas for request validation and OpenAPI documentation.
#
# 🔗 Dependencies:
# - pydantic for schema validation (EmailStr via email-validator)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.auth (authentication endpoints)

"""
Authentication API Schemas

Request Schemas:
- SignupRequest: account registration
- SigninRequest: username-or-email + password
- OAuthRequest: federated login (email + provider display name)
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.shared.core.schemas import CamelModel

from .user_schemas import PASSWORD_MIN_LENGTH, USERNAME_PATTERN


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class SignupRequest(CamelModel):
    """User registration request schema."""

    name: str = Field(..., min_length=1, max_length=150, examples=["Jane Doe"])
    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
        pattern=USERNAME_PATTERN,
        examples=["jane.doe"],
    )
    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=128,
        description="User's password (min 8 characters)",
    )
    phone_number: Optional[str] = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email format and normalize to lowercase."""
        return v.lower()


class SigninRequest(CamelModel):
    """User login request schema."""

    username_or_email: str = Field(..., min_length=1, max_length=255, examples=["jane.doe"])
    password: str = Field(..., min_length=1, max_length=128)


class OAuthRequest(CamelModel):
    """
    Federated login request.

    ``username`` is the provider's display name; the stored username is
    derived from it.
    """

    email: EmailStr
    username: str = Field(..., min_length=1, max_length=150, examples=["Jane Doe 42"])
    name: Optional[str] = Field(default=None, max_length=150)

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        return v.lower()
