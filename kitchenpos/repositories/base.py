"""
Repository Abstract Base Classes

Defines the interface contract for every storage implementation.
Both the in-memory and the SQLAlchemy repositories must implement these
methods and exchange only the dataclasses from kitchenpos.domain.

Use Cases:
    - OrderRepository: atomic save of an order with its line items
    - TableRegistry: occupancy lookups before an order is placed
    - MenuCatalog: menu reference checks for line items
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Optional

from kitchenpos.domain import Menu, MenuGroup, Order, OrderTable


class OrderRepository(ABC):
    """
    Persistence for orders and their line items.

    Line items share the lifetime of their order: they are written with
    it and loaded with it, never on their own.
    """

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """
        Persist a new order and all of its line items in one unit.

        Either everything is stored or nothing is.

        Args:
            order: Order without ids

        Returns:
            Order: Copy with the order id, line item seqs and order_id filled in
        """
        pass

    @abstractmethod
    async def get(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        """
        Load an order with its line items.

        Args:
            order_id: Order to load
            for_update: Lock the row until the caller's save, where supported

        Returns:
            Optional[Order]: None if no such order exists
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[Order]:
        """Return every order, oldest first."""
        pass

    @abstractmethod
    async def save(self, order: Order) -> Order:
        """
        Write back the status of an existing order.

        Raises:
            OrderAlreadyCompletedError: The stored order is already in
                COMPLETION, even if it was not when the caller read it
        """
        pass


class TableRegistry(ABC):
    """Occupancy of the restaurant's tables."""

    @abstractmethod
    async def get_table(self, table_id: int) -> Optional[OrderTable]:
        pass

    @abstractmethod
    async def add_table(self, number_of_guests: int = 0, empty: bool = True) -> OrderTable:
        pass

    @abstractmethod
    async def change_empty(self, table_id: int, empty: bool) -> Optional[OrderTable]:
        """Mark a table occupied or free. Returns None for an unknown id."""
        pass


class MenuCatalog(ABC):
    """Menus that line items may reference."""

    @abstractmethod
    async def menu_exists(self, menu_id: int) -> bool:
        pass

    @abstractmethod
    async def count_existing(self, menu_ids: Iterable[int]) -> int:
        """
        Count how many of the distinct ids in menu_ids are known menus.

        Duplicates in menu_ids are counted once.
        """
        pass

    @abstractmethod
    async def add_menu_group(self, name: str) -> MenuGroup:
        pass

    @abstractmethod
    async def add_menu(
        self,
        name: str,
        price: Decimal,
        menu_group_id: Optional[int] = None,
    ) -> Menu:
        pass
