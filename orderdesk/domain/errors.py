"""
Order Desk Errors

Storage failures are not wrapped: ``sqlalchemy.exc.SQLAlchemyError``
propagates to the caller unchanged.
"""

from typing import Optional


class OrderDeskError(Exception):
    """Base class for order desk errors"""


class InvalidArgumentError(OrderDeskError, ValueError):
    """
    Malformed or missing input, unresolvable reference or undefined status code.

    The caller must change its input before retrying.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class DataIntegrityError(OrderDeskError):
    """A reference row that must exist (status, product, service) is missing."""
