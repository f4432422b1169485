"""
Core module initialization.
Exports configuration and domain errors.
"""

from kitchenpos.core.config import get_settings, Settings, EnvironmentMode, StorageBackend
from kitchenpos.core.exceptions import (
    KitchenPosError,
    InvalidOrderError,
    InvalidOrderStatusError,
    MenuNotFoundError,
    TableNotFoundError,
    TableEmptyError,
    OrderNotFoundError,
    OrderAlreadyCompletedError,
)

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "StorageBackend",
    "KitchenPosError",
    "InvalidOrderError",
    "InvalidOrderStatusError",
    "MenuNotFoundError",
    "TableNotFoundError",
    "TableEmptyError",
    "OrderNotFoundError",
    "OrderAlreadyCompletedError",
]
