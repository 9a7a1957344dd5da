# 📄 File: app/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how roles and user accounts are stored in the database, including which
# names and emails must be unique.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for Role and User with case-insensitive unique indexes
# enforced by the store, plus their public dictionary representation.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (Base, TimestampMixin)
#
# 🔄 Connected Modules / Calls From:
# - role_service.py, user_service.py, auth_service.py (CRUD operations)
# - app.modules.catalog / subscriptions (foreign keys to users)
# - Database migration scripts (schema generation)

"""
SQLAlchemy Models for User Management

Models:
- RoleModel: named permission level (``admin`` and ``user`` are seeded)
- UserModel: account credentials and profile, belongs to one role

Both use UUID primary keys and created/updated timestamps from TimestampMixin.
"""

from typing import Any, Dict

from sqlalchemy import Column, ForeignKey, Index, String, Text, Uuid, func

from app.shared.infrastructure.database.connection import Base, TimestampMixin

ROLE_STATUSES = ("active", "inactive")


# =============================================================================
# ROLE MODEL
# =============================================================================

class RoleModel(TimestampMixin, Base):
    """
    SQLAlchemy model for roles.

    ``slug`` is derived from ``name``; both are unique regardless of case.
    """
    __tablename__ = "roles"

    name = Column(String(100), nullable=False, comment="Display name (unique, case-insensitive)")
    slug = Column(String(120), nullable=False, comment="Derived from name")
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="active")

    SEARCH_FIELDS = ("name", "slug", "description")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "slug": "slug",
        "status": "status",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<RoleModel(id={self.id}, slug={self.slug})>"


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(TimestampMixin, Base):
    """
    SQLAlchemy model for user accounts.

    The password hash is stored in ``password_hash`` and never serialized.
    """
    __tablename__ = "users"

    name = Column(String(150), nullable=False)
    username = Column(String(100), nullable=False, comment="Lower-case handle, pattern [a-z0-9_.-]+")
    email = Column(String(255), nullable=False, comment="Stored lower-cased")
    password_hash = Column(String(255), nullable=False, comment="bcrypt hash")
    phone_number = Column(String(50), nullable=True)
    role_id = Column(
        Uuid,
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index("uq_users_username", "username", unique=True),
    )

    SEARCH_FIELDS = ("name", "username", "email", "phone_number")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "username": "username",
        "email": "email",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "phoneNumber": self.phone_number,
            "roleId": self.role_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"


# Case-insensitive uniqueness lives in functional indexes
Index("uq_roles_name_lower", func.lower(RoleModel.__table__.c.name), unique=True)
Index("uq_roles_slug_lower", func.lower(RoleModel.__table__.c.slug), unique=True)
Index("uq_users_email_lower", func.lower(UserModel.__table__.c.email), unique=True)
