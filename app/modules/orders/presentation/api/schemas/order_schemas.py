# 📄 File: app/modules/orders/presentation/api/schemas/order_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a client sends to place an order or update one.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for order endpoints. At least one line is required;
# ``unitPrice`` falls back to the item's price and ``quantity`` to 1.
# 🔗 Dependencies:
# pydantic, app.shared.core.schemas
# 🔄 Connected Modules / Calls From:
# app.modules.orders.presentation.api.v1.orders

from typing import List, Literal, Optional

from pydantic import Field

from app.shared.core.schemas import CamelModel

OrderStatus = Literal["pending", "processing", "shipped", "completed", "canceled"]


class OrderLineRequest(CamelModel):
    item_id: str = Field(..., min_length=1)
    unit_price: Optional[float] = Field(default=None, ge=0)
    quantity: int = Field(default=1, ge=1)


class OrderCreateRequest(CamelModel):
    """New orders always start as ``pending``."""

    business_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=150)
    phone: str = Field(..., min_length=1, max_length=50)
    address: str = Field(..., min_length=1)
    items: List[OrderLineRequest] = Field(..., min_length=1)
    note: str = ""


class OrderUpdateRequest(CamelModel):
    """Status may jump to any allowed value; lines and totals are fixed."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    address: Optional[str] = Field(default=None, min_length=1)
    note: Optional[str] = None
    status: Optional[OrderStatus] = None
