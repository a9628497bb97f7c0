"""
Order Status Codes

The closed set of statuses exposed at the domain boundary. Storage keeps
statuses in a lookup table keyed by name.
"""

from enum import IntEnum
from typing import Any

from orderdesk.domain.errors import InvalidArgumentError


class OrderStatusCode(IntEnum):
    """Order status enumeration"""
    COMPLETED = 1
    CREATED = 2
    FAILED = 3
    IN_PROGRESS = 4

    @property
    def status_name(self) -> str:
        """Name of the matching row in the status lookup table"""
        return _STATUS_NAMES[self]

    @classmethod
    def resolve(cls, code: Any) -> "OrderStatusCode":
        """
        Map a raw status code to its enum member.

        Raises:
            InvalidArgumentError: If the code is not one of the defined values
        """
        if isinstance(code, bool):
            raise InvalidArgumentError(f"Invalid status enum value: {code}", "status")
        try:
            return cls(code)
        except (ValueError, TypeError):
            raise InvalidArgumentError(f"Invalid status enum value: {code}", "status") from None


_STATUS_NAMES = {
    OrderStatusCode.COMPLETED: "Completed",
    OrderStatusCode.CREATED: "Created",
    OrderStatusCode.FAILED: "Failed",
    OrderStatusCode.IN_PROGRESS: "InProgress",
}

COMPLETED_STATUS_NAME = OrderStatusCode.COMPLETED.status_name
