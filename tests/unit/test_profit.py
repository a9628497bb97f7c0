"""
Unit Tests - Profit Aggregation
"""
from datetime import datetime
from decimal import Decimal

import pytest

from orderdesk.domain import TotalProfit
from orderdesk.repository import OrderRepository, ProfitAggregator
from orderdesk.repository.orders import utc_now
from orderdesk.repository.profit import year_bounds

JULY_2025 = datetime(2025, 7, 10, 9, 30)


class TestProfitOfCompletedOrders:
    """Tests for profit_of_completed_orders"""

    async def test_one_row_per_completed_item(self, test_db, add_order, mailbox, add_product):
        archive = await add_product("Archive", "2.00", "3.50")
        order_id = await add_order(items=[(mailbox, 2), (archive, 1)], created_date=JULY_2025)

        profits = await ProfitAggregator(test_db).profit_of_completed_orders(2025)

        assert len(profits) == 2
        assert {p.order_id for p in profits} == {order_id}
        by_product = {p.product_name: p for p in profits}
        assert by_product["100GB Mailbox"].total_cost == Decimal("1.6")
        assert by_product["100GB Mailbox"].total_price == Decimal("1.8")
        assert by_product["100GB Mailbox"].profit == Decimal("0.2")
        assert by_product["Archive"].profit == Decimal("1.5")
        assert by_product["Archive"].service_name == "Email"
        assert all(p.created_date == JULY_2025 for p in profits)

    async def test_only_completed_orders_count(self, test_db, add_order):
        await add_order(1, created_date=JULY_2025)
        for status in ("Created", "Failed", "InProgress"):
            await add_order(5, status=status, created_date=JULY_2025)

        profits = await ProfitAggregator(test_db).profit_of_completed_orders(2025)

        assert len(profits) == 1
        assert profits[0].profit == Decimal("0.1")

    async def test_only_requested_year_counts(self, test_db, add_order):
        await add_order(1, created_date=datetime(2024, 12, 31, 23, 59, 59))
        in_year = await add_order(1, created_date=datetime(2025, 1, 1, 0, 0))
        await add_order(1, created_date=datetime(2026, 1, 1, 0, 0))

        profits = await ProfitAggregator(test_db).profit_of_completed_orders(2025)

        assert [p.order_id for p in profits] == [in_year]

    async def test_defaults_to_current_year(self, test_db, add_order):
        order_id = await add_order(1)

        profits = await ProfitAggregator(test_db).profit_of_completed_orders()

        assert [p.order_id for p in profits] == [order_id]

    async def test_rows_are_grouped_by_month(self, test_db, add_order):
        await add_order(1, created_date=datetime(2025, 9, 1))
        await add_order(1, created_date=datetime(2025, 2, 1))
        await add_order(1, created_date=datetime(2025, 9, 2))

        profits = await ProfitAggregator(test_db).profit_of_completed_orders(2025)

        assert [p.created_date.month for p in profits] == [2, 9, 9]

    async def test_each_row_gets_its_own_id(self, test_db, add_order):
        await add_order(1, created_date=JULY_2025)
        await add_order(1, created_date=JULY_2025)

        profits = await ProfitAggregator(test_db).profit_of_completed_orders(2025)

        assert len({p.id for p in profits}) == 2


class TestTotalProfitByMonth:
    """Tests for total_profit_by_month"""

    async def test_single_order(self, test_db, add_order):
        await add_order(1, created_date=JULY_2025)

        totals = await ProfitAggregator(test_db).total_profit_by_month(2025)

        assert totals == [TotalProfit(month=7, profit=Decimal("0.1"))]

    async def test_orders_in_same_month_are_summed(self, test_db, add_order):
        await add_order(1, created_date=JULY_2025)
        await add_order(2, created_date=datetime(2025, 7, 28))

        totals = await ProfitAggregator(test_db).total_profit_by_month(2025)

        assert len(totals) == 1
        assert totals[0].month == 7
        assert totals[0].profit == Decimal("0.3")

    async def test_three_orders_same_month(self, test_db, add_order):
        for quantity in (1, 2, 1):
            await add_order(quantity, created_date=JULY_2025)

        totals = await ProfitAggregator(test_db).total_profit_by_month(2025)

        assert [(t.month, t.profit) for t in totals] == [(7, Decimal("0.4"))]

    async def test_months_ascending_without_zero_fill(self, test_db, add_order):
        await add_order(3, created_date=datetime(2025, 11, 5))
        await add_order(1, created_date=datetime(2025, 3, 5))
        await add_order(2, created_date=datetime(2025, 11, 20))

        totals = await ProfitAggregator(test_db).total_profit_by_month(2025)

        assert [t.month for t in totals] == [3, 11]
        assert totals[0].profit == Decimal("0.1")
        assert totals[1].profit == Decimal("0.5")

    async def test_profit_follows_current_catalog_prices(self, test_db, add_order, mailbox):
        await add_order(2, created_date=JULY_2025)
        mailbox.unit_price = Decimal("1.30")
        await test_db.commit()

        totals = await ProfitAggregator(test_db).total_profit_by_month(2025)

        assert totals[0].profit == Decimal("1.0")

    async def test_status_change_moves_order_in_and_out(self, test_db, add_order):
        order_id = await add_order(1, status="InProgress", created_date=JULY_2025)
        aggregator = ProfitAggregator(test_db)

        assert await aggregator.total_profit_by_month(2025) == []

        await OrderRepository(test_db).update_order_status(order_id, 1)

        assert await aggregator.total_profit_by_month(2025) == [
            TotalProfit(month=7, profit=Decimal("0.1"))
        ]

    async def test_repeated_calls_are_identical(self, test_db, add_order):
        await add_order(1, created_date=JULY_2025)
        await add_order(2, created_date=datetime(2025, 8, 1))
        aggregator = ProfitAggregator(test_db)

        first = await aggregator.total_profit_by_month(2025)
        second = await aggregator.total_profit_by_month(2025)

        assert first == second

    async def test_year_without_completed_orders(self, test_db, statuses):
        assert await ProfitAggregator(test_db).total_profit_by_month(2025) == []

    async def test_year_not_in_database(self, test_db, add_order):
        await add_order(1, created_date=JULY_2025)

        assert await ProfitAggregator(test_db).total_profit_by_month(2019) == []

    @pytest.mark.parametrize("year", [-1, 0, 10000])
    async def test_invalid_year_returns_empty(self, test_db, add_order, year):
        await add_order(1, created_date=JULY_2025)

        assert await ProfitAggregator(test_db).total_profit_by_month(year) == []

    async def test_future_year_returns_empty(self, test_db, add_order):
        await add_order(1)

        assert await ProfitAggregator(test_db).total_profit_by_month(utc_now().year + 1) == []


class TestYearBounds:
    """Tests for year_bounds"""

    def test_regular_year(self):
        assert year_bounds(2025) == (datetime(2025, 1, 1), datetime(2026, 1, 1))

    @pytest.mark.parametrize("year", [-5, 0, 9999])
    def test_unrepresentable_years(self, year):
        assert year_bounds(year) is None
