"""
Profit Aggregator

Derives per-item profit from completed orders and rolls it up by calendar
month. Profit is ``total price - total cost`` of an item, priced against the
current catalog.
"""

from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.database.identifiers import new_identifier
from orderdesk.database.models import Order, OrderStatus
from orderdesk.domain.status import COMPLETED_STATUS_NAME
from orderdesk.domain.views import OrderProfit, TotalProfit
from orderdesk.repository.orders import order_detail_query, to_order_detail, utc_now

logger = structlog.get_logger(__name__)


def year_bounds(year: int) -> Optional[Tuple[datetime, datetime]]:
    """Half-open ``[start, end)`` range of a calendar year, or None if unrepresentable."""
    if not MINYEAR <= year < MAXYEAR:
        return None
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


class ProfitAggregator:
    """Profit reporting over completed orders"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def profit_of_completed_orders(self, year: Optional[int] = None) -> List[OrderProfit]:
        """
        One profit row per item of every completed order created in ``year``.

        Args:
            year: Calendar year; defaults to the current UTC year

        Returns:
            Profit rows in creation order, hence grouped by (year, month).
            Empty for years without completed orders, including negative or
            future years.
        """
        target_year = utc_now().year if year is None else year
        bounds = year_bounds(target_year)
        if bounds is None:
            logger.debug("Year outside representable range", year=target_year)
            return []
        start, end = bounds

        result = await self.session.execute(
            order_detail_query()
            .join(Order.status)
            .where(
                OrderStatus.name == COMPLETED_STATUS_NAME,
                Order.created_date >= start,
                Order.created_date < end,
            )
            .order_by(Order.created_date)
        )
        completed = [to_order_detail(order) for order in result.scalars().all()]

        profits = [
            OrderProfit(
                id=new_identifier(),
                order_id=detail.id,
                service_id=item.service_id,
                service_name=item.service_name,
                product_id=item.product_id,
                product_name=item.product_name,
                total_cost=item.total_cost,
                total_price=item.total_price,
                profit=item.total_price - item.total_cost,
                created_date=detail.created_date,
            )
            for detail in completed
            for item in detail.items
        ]

        logger.debug(
            "Completed order profit computed",
            year=target_year,
            orders=len(completed),
            items=len(profits),
        )
        return profits

    async def total_profit_by_month(self, year: Optional[int] = None) -> List[TotalProfit]:
        """
        Profit summed per calendar month, ascending by month.

        Months without completed orders are omitted rather than zero-filled.
        """
        monthly: Dict[int, Decimal] = defaultdict(Decimal)
        for row in await self.profit_of_completed_orders(year):
            monthly[row.created_date.month] += row.profit

        return [
            TotalProfit(month=month, profit=monthly[month])
            for month in sorted(monthly)
        ]
