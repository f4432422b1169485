"""
In-Memory Repository Implementations

Dictionary-backed stand-ins for the SQL repositories.
Used for tests and for demo runs (STORAGE_BACKEND=memory).

Behavior:
    - Ids are sequential per repository, starting at 1
    - Stored objects are deep copies, so callers cannot mutate the store
      behind the repository's back
    - add() builds the full record before inserting it, which keeps the
      order and its line items all-or-nothing
"""

import copy
import itertools
import logging
from decimal import Decimal
from typing import Iterable, Optional

from kitchenpos.core.exceptions import OrderAlreadyCompletedError
from kitchenpos.domain import Menu, MenuGroup, Order, OrderStatus, OrderTable
from kitchenpos.repositories.base import MenuCatalog, OrderRepository, TableRegistry

logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """
    Order store kept in a dict keyed by order id.

    Example:
        >>> repo = InMemoryOrderRepository()
        >>> saved = await repo.add(order)
        >>> saved.id
        1
    """

    def __init__(self):
        self._orders: dict[int, Order] = {}
        self._order_ids = itertools.count(1)
        self._seqs = itertools.count(1)

    async def add(self, order: Order) -> Order:
        stored = copy.deepcopy(order)
        stored.id = next(self._order_ids)
        for line_item in stored.order_line_items:
            line_item.seq = next(self._seqs)
            line_item.order_id = stored.id
        self._orders[stored.id] = stored
        logger.debug(f"Memory: stored order #{stored.id}")
        return copy.deepcopy(stored)

    async def get(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        order = self._orders.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    async def find_all(self) -> list[Order]:
        return [copy.deepcopy(self._orders[key]) for key in sorted(self._orders)]

    async def save(self, order: Order) -> Order:
        stored = self._orders[order.id]
        if stored.order_status is OrderStatus.COMPLETION:
            raise OrderAlreadyCompletedError(f"Order #{order.id} is already completed")
        stored.order_status = order.order_status
        return copy.deepcopy(stored)


class InMemoryTableRegistry(TableRegistry):

    def __init__(self):
        self._tables: dict[int, OrderTable] = {}
        self._ids = itertools.count(1)

    async def get_table(self, table_id: int) -> Optional[OrderTable]:
        table = self._tables.get(table_id)
        return copy.copy(table) if table is not None else None

    async def add_table(self, number_of_guests: int = 0, empty: bool = True) -> OrderTable:
        table = OrderTable(
            id=next(self._ids),
            number_of_guests=number_of_guests,
            empty=empty,
        )
        self._tables[table.id] = table
        return copy.copy(table)

    async def change_empty(self, table_id: int, empty: bool) -> Optional[OrderTable]:
        table = self._tables.get(table_id)
        if table is None:
            return None
        table.empty = empty
        return copy.copy(table)


class InMemoryMenuCatalog(MenuCatalog):

    def __init__(self):
        self._menus: dict[int, Menu] = {}
        self._groups: dict[int, MenuGroup] = {}
        self._menu_ids = itertools.count(1)
        self._group_ids = itertools.count(1)

    async def menu_exists(self, menu_id: int) -> bool:
        return menu_id in self._menus

    async def count_existing(self, menu_ids: Iterable[int]) -> int:
        return sum(1 for menu_id in set(menu_ids) if menu_id in self._menus)

    async def add_menu_group(self, name: str) -> MenuGroup:
        group = MenuGroup(name=name, id=next(self._group_ids))
        self._groups[group.id] = group
        return copy.copy(group)

    async def add_menu(
        self,
        name: str,
        price: Decimal,
        menu_group_id: Optional[int] = None,
    ) -> Menu:
        menu = Menu(
            name=name,
            price=Decimal(price),
            menu_group_id=menu_group_id,
            id=next(self._menu_ids),
        )
        self._menus[menu.id] = menu
        return copy.copy(menu)
