"""
Order Views

Read models projected from order rows joined with the catalog, plus the
payload accepted for order creation. None of these are persisted.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OrderItemDetail(BaseModel):
    """Order line expanded with catalog names and per-item totals"""
    id: UUID
    order_id: UUID
    product_id: UUID
    product_name: str
    service_id: UUID
    service_name: str
    quantity: int
    unit_cost: Decimal
    unit_price: Decimal
    total_cost: Decimal
    total_price: Decimal


class OrderSummary(BaseModel):
    """Order header with item count and derived totals"""
    id: UUID
    reseller_id: UUID
    customer_id: UUID
    status_id: UUID
    status_name: str
    created_date: datetime
    item_count: int
    total_cost: Decimal
    total_price: Decimal


class OrderDetail(OrderSummary):
    """Order header with the expanded item list"""
    items: List[OrderItemDetail] = Field(default_factory=list)


class OrderProfit(BaseModel):
    """Profit of one item of a completed order"""
    id: UUID
    order_id: UUID
    service_id: UUID
    service_name: str
    product_id: UUID
    product_name: str
    total_cost: Decimal
    total_price: Decimal
    profit: Decimal
    created_date: datetime


class TotalProfit(BaseModel):
    """Profit summed over one calendar month"""
    month: int
    profit: Decimal


# =============================================================================
# CREATION PAYLOAD
# =============================================================================

class NewOrderItem(BaseModel):
    """Requested order line. Presence and ranges are checked by the repository."""
    model_config = ConfigDict(extra="ignore")

    product_id: Optional[UUID] = None
    service_id: Optional[UUID] = None
    quantity: Optional[int] = None


class NewOrder(BaseModel):
    """
    Requested order.

    ``id`` and ``created_date`` are accepted for symmetry with ``OrderDetail``
    but ignored: both are assigned on creation.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[UUID] = None
    reseller_id: Optional[UUID] = None
    customer_id: Optional[UUID] = None
    status_id: Optional[UUID] = None
    created_date: Optional[datetime] = None
    items: Optional[List[NewOrderItem]] = None
