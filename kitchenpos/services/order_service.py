"""
Order Service

Creates orders and moves them through COOKING -> MEAL -> COMPLETION.

Creation checks, in order:
    1. At least one line item, every quantity positive
    2. Every menu referenced exists (duplicate menu ids fail this check)
    3. The table exists and is not empty

Status changes:
    - COMPLETION is terminal, nothing leaves it (not even COMPLETION)
    - COOKING cannot be requested, it is only set on creation
    - Anything else is accepted
"""

import logging
from datetime import datetime
from typing import Iterable

from kitchenpos.core.exceptions import (
    InvalidOrderError,
    InvalidOrderStatusError,
    MenuNotFoundError,
    OrderAlreadyCompletedError,
    OrderNotFoundError,
    TableEmptyError,
    TableNotFoundError,
)
from kitchenpos.domain import Order, OrderLineItem, OrderStatus
from kitchenpos.repositories.base import MenuCatalog, OrderRepository, TableRegistry

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order lifecycle manager.

    All state lives behind the injected repositories; the service itself
    holds none between calls.

    Example:
        >>> service = OrderService(orders, tables, menus)
        >>> order = await service.create_order(1, [OrderLineItem(menu_id=1, quantity=2)])
        >>> order.order_status
        <OrderStatus.COOKING: 'COOKING'>
    """

    def __init__(
        self,
        orders: OrderRepository,
        tables: TableRegistry,
        menus: MenuCatalog,
    ):
        self.orders = orders
        self.tables = tables
        self.menus = menus

    async def create_order(
        self,
        order_table_id: int,
        line_items: Iterable[OrderLineItem],
    ) -> Order:
        """
        Place a new order at a table.

        Args:
            order_table_id: Table the order is placed at
            line_items: (menu, quantity) entries, at least one

        Returns:
            Order: Stored order in COOKING with generated ids

        Raises:
            InvalidOrderError: No line items, or a quantity below 1
            MenuNotFoundError: A referenced menu does not exist
            TableNotFoundError: Unknown table
            TableEmptyError: Table is marked empty
        """
        line_items = [
            OrderLineItem(menu_id=item.menu_id, quantity=item.quantity)
            for item in line_items
        ]

        if not line_items:
            raise InvalidOrderError("An order needs at least one line item")
        for item in line_items:
            if item.quantity < 1:
                raise InvalidOrderError(
                    f"Quantity for menu {item.menu_id} must be positive, got {item.quantity}"
                )

        menu_ids = [item.menu_id for item in line_items]
        if await self.menus.count_existing(menu_ids) != len(menu_ids):
            raise MenuNotFoundError(f"Unknown or repeated menu in {menu_ids}")

        table = await self.tables.get_table(order_table_id)
        if table is None:
            raise TableNotFoundError(f"Order table {order_table_id} does not exist")
        if table.empty:
            raise TableEmptyError(f"Order table {order_table_id} is empty")

        order = await self.orders.add(
            Order(
                order_table_id=order_table_id,
                order_status=OrderStatus.COOKING,
                ordered_time=datetime.now(),
                order_line_items=line_items,
            )
        )

        logger.info(
            f"🍳 Order #{order.id} placed at table {order_table_id} "
            f"({len(order.order_line_items)} line items)"
        )
        return order

    async def change_order_status(self, order_id: int, order_status: OrderStatus) -> Order:
        """
        Move an order to a new status.

        Raises:
            OrderNotFoundError: Unknown order
            OrderAlreadyCompletedError: Order is in COMPLETION
            InvalidOrderStatusError: Target is not reachable (COOKING)
        """
        order = await self.orders.get(order_id, for_update=True)
        if order is None:
            raise OrderNotFoundError(f"Order #{order_id} not found")

        if order.order_status.is_terminal:
            raise OrderAlreadyCompletedError(f"Order #{order_id} is already completed")
        if not order.order_status.can_transition_to(order_status):
            raise InvalidOrderStatusError(
                f"Order #{order_id} cannot move from "
                f"{order.order_status.value} to {order_status.value}"
            )

        previous = order.order_status
        order.order_status = order_status
        order = await self.orders.save(order)

        logger.info(f"Order #{order_id}: {previous.value} -> {order.order_status.value}")
        return order

    async def get_order(self, order_id: int) -> Order:
        order = await self.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Order #{order_id} not found")
        return order

    async def list_orders(self) -> list[Order]:
        return await self.orders.find_all()
