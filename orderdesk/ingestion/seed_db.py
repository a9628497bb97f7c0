"""
Reference Data Seeding

Inserts the status lookup rows and a starter catalog. Every step only adds
rows missing by name, so seeding can be re-run safely.
"""

import asyncio
from decimal import Decimal
from typing import Dict, List, Tuple

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.database.connection import close_database, create_schema, get_db, init_database
from orderdesk.database.identifiers import new_identifier
from orderdesk.database.models import OrderProduct, OrderService, OrderStatus
from orderdesk.domain.status import OrderStatusCode

logger = structlog.get_logger(__name__)

# (service name, [(product name, unit cost, unit price)])
STARTER_CATALOG: List[Tuple[str, List[Tuple[str, Decimal, Decimal]]]] = [
    ("Email", [("100GB Mailbox", Decimal("0.8"), Decimal("0.9"))]),
]


async def seed_statuses(session: AsyncSession) -> Dict[str, OrderStatus]:
    """Ensure one status row per status code; returns rows keyed by name."""
    result = await session.execute(select(OrderStatus))
    existing = {status.name: status for status in result.scalars().all()}

    added = []
    for code in OrderStatusCode:
        if code.status_name not in existing:
            status = OrderStatus(name=code.status_name)
            session.add(status)
            existing[code.status_name] = status
            added.append(code.status_name)

    await session.flush()
    logger.info("Seeded order statuses", added=added, total=len(existing))
    return existing


async def seed_catalog(session: AsyncSession) -> Dict[str, OrderProduct]:
    """Ensure the starter services and products exist; returns products keyed by name."""
    services = {
        service.name: service
        for service in (await session.execute(select(OrderService))).scalars().all()
    }
    products = {
        product.name: product
        for product in (await session.execute(select(OrderProduct))).scalars().all()
    }

    added = []
    for service_name, service_products in STARTER_CATALOG:
        service = services.get(service_name)
        if service is None:
            service = OrderService(id=new_identifier(), name=service_name)
            session.add(service)
            services[service_name] = service

        for name, unit_cost, unit_price in service_products:
            if name in products:
                continue
            product = OrderProduct(
                name=name,
                unit_cost=unit_cost,
                unit_price=unit_price,
                service_id=service.id,
            )
            session.add(product)
            products[name] = product
            added.append(name)

    await session.flush()
    logger.info("Seeded catalog", added=added, services=len(services), products=len(products))
    return products


async def main():
    from orderdesk.config.logging import configure_logging
    configure_logging()

    logger.info("Starting reference data seeding...")
    await init_database()

    try:
        await create_schema()
        async with get_db() as db:
            await seed_statuses(db)
            await seed_catalog(db)
        logger.info("Reference data seeding completed successfully!")
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        raise
    finally:
        await close_database()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
