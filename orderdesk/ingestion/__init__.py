"""
Reference Data Ingestion Module
"""
from .seed_db import seed_statuses, seed_catalog

__all__ = [
    "seed_statuses",
    "seed_catalog",
]
