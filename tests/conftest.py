"""
Test Suite Configuration
"""
from datetime import datetime
from decimal import Decimal
from typing import AsyncGenerator, Dict, List, Optional, Tuple
import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from orderdesk.config import Settings
from orderdesk.database.models import Base, Order, OrderItem, OrderProduct, OrderStatus
from orderdesk.ingestion.seed_db import seed_catalog, seed_statuses
from orderdesk.repository.orders import utc_now


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session"""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def statuses(test_db) -> Dict[str, OrderStatus]:
    """The four status rows, keyed by name"""
    rows = await seed_statuses(test_db)
    await test_db.commit()
    return rows


@pytest.fixture
async def mailbox(test_db, statuses) -> OrderProduct:
    """'100GB Mailbox' product (cost 0.8, price 0.9) of the 'Email' service"""
    products = await seed_catalog(test_db)
    await test_db.commit()
    return products["100GB Mailbox"]


@pytest.fixture
def add_order(test_db, statuses, mailbox):
    """
    Factory inserting an order directly, bypassing repository validation.

    ``items`` is a list of (product, quantity); defaults to one mailbox line.
    """
    async def _add_order(
        quantity: Optional[int] = 1,
        status: str = "Completed",
        created_date: Optional[datetime] = None,
        items: Optional[List[Tuple[OrderProduct, Optional[int]]]] = None,
        order_id: Optional[uuid.UUID] = None,
    ) -> uuid.UUID:
        order_id = order_id or uuid.uuid4()
        if items is None:
            items = [(mailbox, quantity)]

        test_db.add(Order(
            id=order_id,
            reseller_id=uuid.uuid4(),
            customer_id=uuid.uuid4(),
            status_id=statuses[status].id,
            created_date=created_date or utc_now(),
            items=[
                OrderItem(
                    id=uuid.uuid4(),
                    order_id=order_id,
                    product_id=product.id,
                    service_id=product.service_id,
                    quantity=item_quantity,
                )
                for product, item_quantity in items
            ],
        ))
        await test_db.commit()
        return order_id

    return _add_order


@pytest.fixture
async def add_product(test_db, mailbox):
    """Factory adding another product to the mailbox's service"""
    async def _add_product(name: str, unit_cost: str, unit_price: str) -> OrderProduct:
        product = OrderProduct(
            id=uuid.uuid4(),
            service_id=mailbox.service_id,
            name=name,
            unit_cost=Decimal(unit_cost),
            unit_price=Decimal(unit_price),
        )
        test_db.add(product)
        await test_db.commit()
        return product

    return _add_product
