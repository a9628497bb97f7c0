"""
Repository Module
"""
from .catalog import CatalogRepository
from .orders import OrderRepository
from .profit import ProfitAggregator

__all__ = [
    "CatalogRepository",
    "OrderRepository",
    "ProfitAggregator",
]
