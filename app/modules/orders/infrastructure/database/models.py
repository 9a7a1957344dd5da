# 📄 File: app/modules/orders/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how an order is stored: who it is for, which business it was placed
# with, the list of things bought and the final price.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for Order. Order lines are embedded as a JSON array
# (document-style) with item ids stored as strings; ``to_dict`` turns them back
# into UUIDs so relationship expansion can resolve them.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.infrastructure.database.connection (Base, TimestampMixin)
#
# 🔄 Connected Modules / Calls From:
# - order_service.py (CRUD operations)
# - app.modules.dashboard (aggregate counts)

from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import JSON, Column, ForeignKey, Numeric, String, Text, Uuid

from app.shared.infrastructure.database.connection import Base, TimestampMixin

ORDER_STATUSES = ("pending", "processing", "shipped", "completed", "canceled")


class OrderModel(TimestampMixin, Base):
    """
    SQLAlchemy model for orders.

    ``total`` is the sum of line totals at creation time and is never recomputed.
    """
    __tablename__ = "orders"

    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False, comment="Buyer name")
    phone = Column(String(50), nullable=False)
    address = Column(Text, nullable=False)
    items = Column(JSON, nullable=False, default=list, comment="[{itemId, unitPrice, quantity, total}]")
    total = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    note = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="pending")

    SEARCH_FIELDS = ("name", "phone", "address")
    SORT_FIELDS = {
        "createdAt": "created_at",
        "updatedAt": "updated_at",
        "name": "name",
        "total": "total",
        "status": "status",
    }

    def _lines(self) -> List[Dict[str, Any]]:
        return [
            {
                "itemId": UUID(line["itemId"]),
                "unitPrice": line["unitPrice"],
                "quantity": line["quantity"],
                "total": line["total"],
            }
            for line in self.items or []
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "business": self.business_id,
            "name": self.name,
            "phone": self.phone,
            "address": self.address,
            "items": self._lines(),
            "total": self.total,
            "note": self.note,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self) -> str:
        return f"<OrderModel(id={self.id}, business_id={self.business_id}, status={self.status})>"
