"""
Domain Errors

Every rejected order operation raises a subclass of KitchenPosError.
Each class carries the HTTP status the API answers with, so the single
exception handler in main.py can translate them without a lookup table.
"""

from typing import Optional


class KitchenPosError(Exception):
    """Base class for all validation failures raised by the services."""

    status_code: int = 400
    error: str = "Bad Request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.error
        super().__init__(self.message)


class InvalidOrderError(KitchenPosError):
    """Order has no line items or a line item has a non-positive quantity."""
    error = "Invalid order"


class InvalidOrderStatusError(InvalidOrderError):
    """Requested status cannot be set through a status change."""
    error = "Invalid order status"


class MenuNotFoundError(KitchenPosError):
    """A line item references a menu that is not in the catalog."""
    error = "Menu not found"


class TableNotFoundError(KitchenPosError):
    error = "Order table not found"


class TableEmptyError(KitchenPosError):
    """Orders can only be placed at an occupied table."""
    error = "Order table is empty"


class OrderNotFoundError(KitchenPosError):
    status_code = 404
    error = "Order not found"


class OrderAlreadyCompletedError(KitchenPosError):
    """COMPLETION is terminal."""
    status_code = 409
    error = "Order already completed"
