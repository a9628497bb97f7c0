"""
Domain Module
"""
from .errors import OrderDeskError, InvalidArgumentError, DataIntegrityError
from .status import OrderStatusCode
from .views import (
    OrderItemDetail,
    OrderSummary,
    OrderDetail,
    OrderProfit,
    TotalProfit,
    NewOrder,
    NewOrderItem,
)

__all__ = [
    "OrderDeskError",
    "InvalidArgumentError",
    "DataIntegrityError",
    "OrderStatusCode",
    "OrderItemDetail",
    "OrderSummary",
    "OrderDetail",
    "OrderProfit",
    "TotalProfit",
    "NewOrder",
    "NewOrderItem",
]
