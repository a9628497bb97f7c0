"""
Orders API Endpoints

REST API over the order repository and the profit aggregator.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status as http_status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.database.connection import get_db_dependency
from orderdesk.domain.views import (
    NewOrder,
    OrderDetail,
    OrderProfit,
    OrderSummary,
    TotalProfit,
)
from orderdesk.repository import OrderRepository, ProfitAggregator
from orderdesk.repository.orders import utc_now

router = APIRouter()


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class OrderProfitResponse(BaseModel):
    """Item-level profit for one year"""
    target_year: int
    orders: List[OrderProfit]


class TotalProfitResponse(BaseModel):
    """Monthly profit for one year"""
    target_year: int
    orders: List[TotalProfit]


class CreateOrderResponse(BaseModel):
    """Order creation acknowledgement"""
    message: str


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_order_repository(db: AsyncSession = Depends(get_db_dependency)) -> OrderRepository:
    return OrderRepository(db)


def get_profit_aggregator(db: AsyncSession = Depends(get_db_dependency)) -> ProfitAggregator:
    return ProfitAggregator(db)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get("", response_model=List[OrderSummary])
async def list_orders(
    repository: OrderRepository = Depends(get_order_repository),
) -> List[OrderSummary]:
    """List all orders, newest first."""
    return await repository.list_orders()


@router.post("", response_model=CreateOrderResponse, status_code=http_status.HTTP_201_CREATED)
async def create_order(
    order: NewOrder,
    repository: OrderRepository = Depends(get_order_repository),
) -> CreateOrderResponse:
    """
    Create an order with its items.

    Validation failures surface as 400 through the application error handler.
    """
    if not await repository.create_order(order):
        raise HTTPException(status_code=400, detail="Failed to create order.")
    return CreateOrderResponse(message="Order created successfully")


@router.get("/status/{status}", response_model=List[OrderDetail])
async def get_orders_by_status(
    status: int,
    repository: OrderRepository = Depends(get_order_repository),
) -> List[OrderDetail]:
    """Orders in the given status (1=Completed, 2=Created, 3=Failed, 4=InProgress)."""
    return await repository.get_orders_by_status(status)


@router.get("/profit", response_model=OrderProfitResponse)
async def get_profit_of_completed_orders(
    year: Optional[int] = Query(None),
    aggregator: ProfitAggregator = Depends(get_profit_aggregator),
) -> OrderProfitResponse:
    """Item-level profit of completed orders for a year (default: current year)."""
    target_year = year if year is not None else utc_now().year
    orders = await aggregator.profit_of_completed_orders(target_year)
    return OrderProfitResponse(target_year=target_year, orders=orders)


@router.get("/profit/monthly", response_model=TotalProfitResponse)
async def get_total_profit_by_month(
    year: Optional[int] = Query(None),
    aggregator: ProfitAggregator = Depends(get_profit_aggregator),
) -> TotalProfitResponse:
    """Profit of completed orders summed per month."""
    target_year = year if year is not None else utc_now().year
    orders = await aggregator.total_profit_by_month(target_year)
    return TotalProfitResponse(target_year=target_year, orders=orders)


@router.get("/{order_id}", response_model=OrderDetail)
async def get_order(
    order_id: UUID,
    repository: OrderRepository = Depends(get_order_repository),
) -> OrderDetail:
    """
    Get order details by ID.
    """
    order = await repository.get_order_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put("/{order_id}/status", response_model=OrderDetail)
async def update_order_status(
    order_id: UUID,
    status: int = Query(...),
    repository: OrderRepository = Depends(get_order_repository),
) -> OrderDetail:
    """Move an order to another status."""
    order = await repository.update_order_status(order_id, status)
    if order is None:
        raise HTTPException(status_code=404, detail=f"Order with ID {order_id} not found.")
    return order
