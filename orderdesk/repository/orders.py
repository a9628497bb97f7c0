"""
Order Repository

Reads and writes orders and their items, projects them into summary and
detail views priced against the current catalog, validates new orders and
performs status transitions.

Totals are never stored. Every view sums ``quantity * unit cost/price`` over
the items using the product each item links to at read time.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple
import uuid

import structlog
from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orderdesk.database.identifiers import is_empty_identifier, new_identifier
from orderdesk.database.models import Order, OrderItem, OrderStatus
from orderdesk.domain.errors import DataIntegrityError, InvalidArgumentError
from orderdesk.domain.status import OrderStatusCode
from orderdesk.domain.views import (
    NewOrder,
    OrderDetail,
    OrderItemDetail,
    OrderSummary,
)
from orderdesk.repository.catalog import CatalogRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the form stored in ``created_date``."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# =============================================================================
# PROJECTIONS
# =============================================================================

def order_detail_query() -> Select:
    """Orders with status, items, products and services eagerly loaded."""
    return (
        select(Order)
        .options(
            selectinload(Order.status),
            selectinload(Order.items).selectinload(OrderItem.product),
            selectinload(Order.items).selectinload(OrderItem.service),
        )
        .execution_options(populate_existing=True)
    )


def order_for_update_query(order_id: uuid.UUID) -> Select:
    """The order row alone, locked for a read-modify-write."""
    return (
        select(Order)
        .where(Order.id == order_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def _status_name(order: Order) -> str:
    if order.status is None:
        raise DataIntegrityError(
            f"Order {order.id} references missing status {order.status_id}"
        )
    return order.status.name


def _item_totals(item: OrderItem) -> Tuple[int, Decimal, Decimal]:
    if item.product is None:
        raise DataIntegrityError(
            f"Order item {item.id} references missing product {item.product_id}"
        )
    quantity = item.quantity or 0
    return (
        quantity,
        item.product.unit_cost * quantity,
        item.product.unit_price * quantity,
    )


def _order_totals(order: Order) -> Tuple[Decimal, Decimal]:
    total_cost = ZERO
    total_price = ZERO
    for item in order.items:
        _, cost, price = _item_totals(item)
        total_cost += cost
        total_price += price
    return total_cost, total_price


def to_order_summary(order: Order) -> OrderSummary:
    total_cost, total_price = _order_totals(order)
    return OrderSummary(
        id=order.id,
        reseller_id=order.reseller_id,
        customer_id=order.customer_id,
        status_id=order.status_id,
        status_name=_status_name(order),
        created_date=order.created_date,
        item_count=len(order.items),
        total_cost=total_cost,
        total_price=total_price,
    )


def to_order_item_detail(item: OrderItem) -> OrderItemDetail:
    if item.service is None:
        raise DataIntegrityError(
            f"Order item {item.id} references missing service {item.service_id}"
        )
    quantity, total_cost, total_price = _item_totals(item)
    return OrderItemDetail(
        id=item.id,
        order_id=item.order_id,
        product_id=item.product_id,
        product_name=item.product.name,
        service_id=item.service_id,
        service_name=item.service.name,
        quantity=quantity,
        unit_cost=item.product.unit_cost,
        unit_price=item.product.unit_price,
        total_cost=total_cost,
        total_price=total_price,
    )


def to_order_detail(order: Order) -> OrderDetail:
    summary = to_order_summary(order)
    return OrderDetail(
        **summary.model_dump(),
        items=[to_order_item_detail(item) for item in order.items],
    )


# =============================================================================
# REPOSITORY
# =============================================================================

class OrderRepository:
    """
    Order persistence bound to one ``AsyncSession``.

    Writes commit on the session and roll it back on failure; storage errors
    propagate unchanged.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.catalog = CatalogRepository(session)

    async def list_orders(self) -> List[OrderSummary]:
        """All orders as summaries, newest first."""
        result = await self.session.execute(
            select(Order)
            .options(
                selectinload(Order.status),
                selectinload(Order.items).selectinload(OrderItem.product),
            )
            .order_by(Order.created_date.desc())
            .execution_options(populate_existing=True)
        )
        return [to_order_summary(order) for order in result.scalars().all()]

    async def get_order_by_id(self, order_id: uuid.UUID) -> Optional[OrderDetail]:
        """Order detail, or ``None`` when no order has this id."""
        result = await self.session.execute(
            order_detail_query().where(Order.id == order_id)
        )
        order = result.scalar_one_or_none()
        if order is None:
            return None
        return to_order_detail(order)

    async def get_orders_by_status(self, status: int) -> List[OrderDetail]:
        """
        Details of every order whose status name matches the status code.

        Raises:
            InvalidArgumentError: If ``status`` is not a defined status code
        """
        status_code = OrderStatusCode.resolve(status)

        result = await self.session.execute(
            order_detail_query()
            .join(Order.status)
            .where(OrderStatus.name == status_code.status_name)
            .order_by(Order.created_date.desc())
        )
        return [to_order_detail(order) for order in result.scalars().all()]

    async def update_order_status(
        self, order_id: uuid.UUID, status: int
    ) -> Optional[OrderDetail]:
        """
        Move an order to another status.

        Any status may move to any other status. The order row is locked for
        the read-modify-write where the backend supports row locks.

        Returns:
            The reloaded order detail, or ``None`` when the order does not exist

        Raises:
            InvalidArgumentError: If ``status`` is not a defined status code
            DataIntegrityError: If the status lookup table lacks the status row
        """
        status_code = OrderStatusCode.resolve(status)

        result = await self.session.execute(order_for_update_query(order_id))
        order = result.scalar_one_or_none()
        if order is None:
            logger.info("Order not found for status update", order_id=str(order_id))
            return None

        status_row = await self.catalog.find_status_by_name(status_code)
        if status_row is None:
            await self.session.rollback()
            logger.error(
                "Status row missing from lookup table",
                status=status_code.status_name,
            )
            raise DataIntegrityError(
                f"Status '{status_code.status_name}' is missing from the status table"
            )

        previous_status_id = order.status_id
        order.status_id = status_row.id
        await self._commit("update_order_status", order_id=str(order_id))

        logger.info(
            "Order status updated",
            order_id=str(order_id),
            previous_status_id=str(previous_status_id),
            status=status_code.status_name,
        )
        return await self.get_order_by_id(order_id)

    async def create_order(self, order: Optional[NewOrder]) -> bool:
        """
        Validate and insert an order together with its items.

        Ids and the creation time are assigned here; any supplied by the
        caller are ignored.

        Returns:
            True when the new order can be read back, False otherwise

        Raises:
            InvalidArgumentError: On the first validation failure, before any write
        """
        await self._validate_new_order(order)

        order_id = new_identifier()
        entity = Order(
            id=order_id,
            reseller_id=order.reseller_id,
            customer_id=order.customer_id,
            status_id=order.status_id,
            created_date=utc_now(),
            items=[
                OrderItem(
                    id=new_identifier(),
                    order_id=order_id,
                    product_id=item.product_id,
                    service_id=item.service_id,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
        )
        self.session.add(entity)
        await self._commit("create_order", order_id=str(order_id))

        saved = await self.get_order_by_id(order_id)
        if saved is None:
            logger.warning("Created order could not be reloaded", order_id=str(order_id))
            return False

        logger.info(
            "Order created",
            order_id=str(order_id),
            item_count=saved.item_count,
            total_price=str(saved.total_price),
        )
        return True

    async def _validate_new_order(self, order: Optional[NewOrder]) -> None:
        if order is None:
            self._reject("Order cannot be null.", "order")

        if is_empty_identifier(order.reseller_id):
            self._reject("ResellerId is required.", "reseller_id")
        if is_empty_identifier(order.customer_id):
            self._reject("CustomerId is required.", "customer_id")
        if is_empty_identifier(order.status_id):
            self._reject("StatusId is required.", "status_id")

        if not order.items:
            self._reject("Order must have at least one item (Items).", "items")

        if await self.catalog.find_status_by_id(order.status_id) is None:
            self._reject(f"Status with ID {order.status_id} not found.", "status_id")

        for item in order.items:
            if item is None:
                self._reject("Order items cannot be null.", "items")
            if is_empty_identifier(item.product_id):
                self._reject("ProductId is required for each order item.", "product_id")
            if is_empty_identifier(item.service_id):
                self._reject("ServiceId is required for each order item.", "service_id")
            if item.quantity is None or item.quantity <= 0:
                self._reject("Quantity must be positive for each order item.", "quantity")

            if await self.catalog.find_product_by_id(item.product_id) is None:
                self._reject(f"Product with ID {item.product_id} not found.", "product_id")
            if await self.catalog.find_service_by_id(item.service_id) is None:
                self._reject(f"Service with ID {item.service_id} not found.", "service_id")

    @staticmethod
    def _reject(message: str, field: str) -> None:
        logger.warning("Order rejected", reason=message, field=field)
        raise InvalidArgumentError(message, field)

    async def _commit(self, action: str, **context) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Order write failed, rolled back",
                action=action,
                error=str(e),
                error_type=type(e).__name__,
                **context,
            )
            raise
