"""
Database Module
"""
from .connection import (
    init_database,
    close_database,
    create_schema,
    get_db,
    get_db_dependency,
)
from .identifiers import BinaryUUID, encode_identifier, decode_identifier
from .models import Base, Order, OrderItem, OrderStatus, OrderProduct, OrderService

__all__ = [
    "init_database",
    "close_database",
    "create_schema",
    "get_db",
    "get_db_dependency",
    "BinaryUUID",
    "encode_identifier",
    "decode_identifier",
    "Base",
    "Order",
    "OrderItem",
    "OrderStatus",
    "OrderProduct",
    "OrderService",
]
