"""
Database Models - Order Schema

Relational schema for purchase orders and the reference data they are
priced against:

Transactional Tables:
- Order: order header (reseller, customer, status, creation time)
- OrderItem: line items, one product and one service each

Reference Tables:
- OrderStatus: lifecycle status lookup (Completed, Created, Failed, InProgress)
- OrderProduct: product catalog with unit cost and unit price
- OrderService: service catalog

Every identifier column is a 16-byte binary UUID (see ``identifiers``).
Order totals are never stored; they are derived from the items.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, List
import uuid

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from orderdesk.database.identifiers import BinaryUUID, new_identifier


class Base(DeclarativeBase):
    """Base class for all database models"""
    pass


# =============================================================================
# REFERENCE TABLES
# =============================================================================

class OrderStatus(Base):
    """
    Order Status Lookup Table

    Status is resolved by name, so new rows can be added without touching
    the read paths.
    """
    __tablename__ = "order_status"

    id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, primary_key=True, default=new_identifier
    )
    name: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)

    orders: Mapped[List["Order"]] = relationship(back_populates="status")


class OrderService(Base):
    """Service Catalog Table"""
    __tablename__ = "order_service"

    id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, primary_key=True, default=new_identifier
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    products: Mapped[List["OrderProduct"]] = relationship(back_populates="service")


class OrderProduct(Base):
    """
    Product Catalog Table

    Unit cost and unit price are read at query time, so order totals always
    reflect current catalog prices.
    """
    __tablename__ = "order_product"

    id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, primary_key=True, default=new_identifier
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, ForeignKey("order_service.id"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    unit_cost: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)

    service: Mapped["OrderService"] = relationship(back_populates="products")

    __table_args__ = (
        Index("ix_order_product_service", "service_id"),
    )


# =============================================================================
# TRANSACTIONAL TABLES
# =============================================================================

class Order(Base):
    """
    Order Table

    Only ``status_id`` changes after creation.
    """
    __tablename__ = "order"

    id: Mapped[uuid.UUID] = mapped_column(BinaryUUID, primary_key=True)
    reseller_id: Mapped[uuid.UUID] = mapped_column(BinaryUUID, nullable=False)
    customer_id: Mapped[uuid.UUID] = mapped_column(BinaryUUID, nullable=False)
    status_id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, ForeignKey("order_status.id"), nullable=False
    )
    created_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    status: Mapped["OrderStatus"] = relationship(back_populates="orders")
    items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_order_status", "status_id"),
        Index("ix_order_created_date", "created_date"),
    )


class OrderItem(Base):
    """
    Order Item Table

    Line-item grain. ``quantity`` is nullable at the storage level and read
    as zero when absent.
    """
    __tablename__ = "order_item"

    id: Mapped[uuid.UUID] = mapped_column(BinaryUUID, primary_key=True)
    order_id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, ForeignKey("order.id"), nullable=False
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, ForeignKey("order_product.id"), nullable=False
    )
    service_id: Mapped[uuid.UUID] = mapped_column(
        BinaryUUID, ForeignKey("order_service.id"), nullable=False
    )
    quantity: Mapped[Optional[int]] = mapped_column(Integer)

    # Relationships
    order: Mapped["Order"] = relationship(back_populates="items")
    product: Mapped["OrderProduct"] = relationship()
    service: Mapped["OrderService"] = relationship()

    __table_args__ = (
        Index("ix_order_item_order", "order_id"),
        Index("ix_order_item_product", "product_id"),
    )
