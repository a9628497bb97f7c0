"""
Catalog Accessors

Read-only lookups of status, product and service reference data.
Lookups return ``None`` when the row is absent; the caller decides whether
that is a caller error or a data-integrity fault.
"""

from typing import Optional, Union
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.database.models import OrderProduct, OrderService, OrderStatus
from orderdesk.domain.status import OrderStatusCode


class CatalogRepository:
    """Reference data lookups bound to one session"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_status_by_name(
        self, name: Union[str, OrderStatusCode]
    ) -> Optional[OrderStatus]:
        if isinstance(name, OrderStatusCode):
            name = name.status_name
        result = await self.session.execute(
            select(OrderStatus).where(OrderStatus.name == name)
        )
        return result.scalar_one_or_none()

    async def find_status_by_id(self, status_id: uuid.UUID) -> Optional[OrderStatus]:
        return await self.session.get(OrderStatus, status_id)

    async def find_product_by_id(self, product_id: uuid.UUID) -> Optional[OrderProduct]:
        return await self.session.get(OrderProduct, product_id)

    async def find_service_by_id(self, service_id: uuid.UUID) -> Optional[OrderService]:
        return await self.session.get(OrderService, service_id)
