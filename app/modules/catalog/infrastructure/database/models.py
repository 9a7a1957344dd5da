# 📄 File: app/modules/catalog/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how chat contacts, businesses, menu categories and menu items are stored,
# and which of them disappear together when their owner is removed.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the catalog with cascading foreign keys, per-business
# case-insensitive category uniqueness and JSON columns for item tags/meta.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (Base, TimestampMixin)
#
# 🔄 Connected Modules / Calls From:
# - Catalog domain services (CRUD operations)
# - app.modules.orders (business and item references)
# - app.modules.dashboard (aggregate counts)

"""
SQLAlchemy Models for the Catalog

Models:
- MessagingContactModel: a user's chat-platform identity (stored, never dialled)
- BusinessModel: a user's storefront, shown through one messaging contact
- CategoryModel: menu section inside a business
- ItemModel: menu entry inside a category; ``business_id`` is copied from the category
"""

from typing import Any, Dict

from sqlalchemy import JSON, Column, ForeignKey, Index, Numeric, String, Text, Uuid, func

from app.shared.infrastructure.database.connection import Base, TimestampMixin

CONTACT_STATUSES = ("active", "inactive")
BUSINESS_STATUSES = ("active", "inactive", "pending")
CATEGORY_STATUSES = ("active", "inactive")
ITEM_STATUSES = ("active", "inactive")


# =============================================================================
# MESSAGING CONTACT MODEL
# =============================================================================

class MessagingContactModel(TimestampMixin, Base):
    """Chat-platform identity owned by one user."""
    __tablename__ = "messaging_contacts"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=True)
    username = Column(String(100), nullable=True, comment="Handle on the chat platform")
    phone_number = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="active")

    SEARCH_FIELDS = ("name", "username", "phone_number")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "username": "username",
        "status": "status",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "username": self.username,
            "phoneNumber": self.phone_number,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<MessagingContactModel(id={self.id}, user_id={self.user_id})>"


# =============================================================================
# BUSINESS MODEL
# =============================================================================

class BusinessModel(TimestampMixin, Base):
    """
    A user's storefront.

    The messaging contact must belong to the same user; the service enforces it.
    A contact still linked to a business cannot be deleted.
    """
    __tablename__ = "businesses"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    messaging_contact_id = Column(
        Uuid,
        ForeignKey("messaging_contacts.id"),
        nullable=False,
        index=True,
    )
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    logo = Column(String(500), nullable=False, comment="Logo URL")
    image = Column(String(500), nullable=False, comment="Cover image URL")
    status = Column(String(20), nullable=False, default="active")

    SEARCH_FIELDS = ("name", "description", "location")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "location": "location",
        "status": "status",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "messagingContactId": self.messaging_contact_id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "logo": self.logo,
            "image": self.image,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<BusinessModel(id={self.id}, name={self.name})>"


# =============================================================================
# CATEGORY MODEL
# =============================================================================

class CategoryModel(TimestampMixin, Base):
    """Menu section; name and slug are unique per business regardless of case."""
    __tablename__ = "categories"

    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    slug = Column(String(170), nullable=False, comment="Derived from name")
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
            "businessId": self.business_id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<CategoryModel(id={self.id}, slug={self.slug})>"


# =============================================================================
# ITEM MODEL
# =============================================================================

class ItemModel(TimestampMixin, Base):
    """Menu entry. ``tags`` is a JSON list of distinct strings, ``meta`` free-form JSON."""
    __tablename__ = "items"

    category_id = Column(Uuid, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    business_id = Column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Copied from the category",
    )
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    image = Column(String(500), nullable=False)
    meta = Column(JSON, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    status = Column(String(20), nullable=False, default="active")

    SEARCH_FIELDS = ("name", "description")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "price": "price",
        "status": "status",
    }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "categoryId": self.category_id,
            "businessId": self.business_id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "meta": self.meta,
            "tags": list(self.tags or []),
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<ItemModel(id={self.id}, name={self.name})>"


Index(
    "uq_categories_business_name_lower",
    CategoryModel.__table__.c.business_id,
    func.lower(CategoryModel.__table__.c.name),
    unique=True,
)
Index(
    "uq_categories_business_slug_lower",
    CategoryModel.__table__.c.business_id,
    func.lower(CategoryModel.__table__.c.slug),
    unique=True,
)
