"""
SQLAlchemy Repository Implementations

Repositories over an AsyncSession, one instance per request.
Used whenever STORAGE_BACKEND=sql (the default).

Transactions:
    Every write commits on its own and rolls back on failure. Reads
    issued before a write (table and menu checks) share the same
    transaction, so a rejected order never leaves anything behind.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kitchenpos.core.exceptions import OrderAlreadyCompletedError
from kitchenpos.domain import Menu, MenuGroup, Order, OrderLineItem, OrderStatus, OrderTable
from kitchenpos.models import (
    MenuGroupModel,
    MenuModel,
    OrderLineItemModel,
    OrderModel,
    OrderTableModel,
)
from kitchenpos.repositories.base import MenuCatalog, OrderRepository, TableRegistry

logger = logging.getLogger(__name__)


def _to_order(model: OrderModel) -> Order:
    return Order(
        id=model.id,
        order_table_id=model.order_table_id,
        order_status=model.order_status,
        ordered_time=model.ordered_time,
        order_line_items=[
            OrderLineItem(
                seq=item.seq,
                order_id=item.order_id,
                menu_id=item.menu_id,
                quantity=item.quantity,
            )
            for item in model.order_line_items
        ],
    )


def _to_table(model: OrderTableModel) -> OrderTable:
    return OrderTable(
        id=model.id,
        table_group_id=model.table_group_id,
        number_of_guests=model.number_of_guests,
        empty=model.empty,
    )


async def _commit(session: AsyncSession) -> None:
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        raise


class SqlOrderRepository(OrderRepository):
    """
    Orders stored in the orders / order_line_item tables.

    Example:
        >>> async with get_session_maker()() as session:
        ...     repo = SqlOrderRepository(session)
        ...     order = await repo.get(1)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, order: Order) -> Order:
        model = OrderModel(
            order_table_id=order.order_table_id,
            order_status=order.order_status,
            ordered_time=order.ordered_time,
            order_line_items=[
                OrderLineItemModel(menu_id=item.menu_id, quantity=item.quantity)
                for item in order.order_line_items
            ],
        )
        self.session.add(model)
        await _commit(self.session)
        logger.debug(f"SQL: stored order #{model.id} with {len(model.order_line_items)} line items")
        return _to_order(model)

    async def get(self, order_id: int, for_update: bool = False) -> Optional[Order]:
        query = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        model = result.scalar_one_or_none()
        return _to_order(model) if model is not None else None

    async def find_all(self) -> list[Order]:
        result = await self.session.execute(select(OrderModel).order_by(OrderModel.id))
        return [_to_order(model) for model in result.scalars().all()]

    async def save(self, order: Order) -> Order:
        # COMPLETION is re-checked in the UPDATE; FOR UPDATE is a no-op on SQLite.
        result = await self.session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order.id,
                OrderModel.order_status != OrderStatus.COMPLETION,
            )
            .values(order_status=order.order_status)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            raise OrderAlreadyCompletedError(f"Order #{order.id} is already completed")
        await _commit(self.session)
        return await self.get(order.id)


class SqlTableRegistry(TableRegistry):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_table(self, table_id: int) -> Optional[OrderTable]:
        model = await self.session.get(OrderTableModel, table_id)
        return _to_table(model) if model is not None else None

    async def add_table(self, number_of_guests: int = 0, empty: bool = True) -> OrderTable:
        model = OrderTableModel(number_of_guests=number_of_guests, empty=empty)
        self.session.add(model)
        await _commit(self.session)
        return _to_table(model)

    async def change_empty(self, table_id: int, empty: bool) -> Optional[OrderTable]:
        model = await self.session.get(OrderTableModel, table_id)
        if model is None:
            return None
        model.empty = empty
        await _commit(self.session)
        return _to_table(model)


class SqlMenuCatalog(MenuCatalog):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def menu_exists(self, menu_id: int) -> bool:
        return await self.session.get(MenuModel, menu_id) is not None

    async def count_existing(self, menu_ids: Iterable[int]) -> int:
        distinct_ids = set(menu_ids)
        if not distinct_ids:
            return 0
        result = await self.session.execute(
            select(func.count(MenuModel.id)).where(MenuModel.id.in_(distinct_ids))
        )
        return result.scalar() or 0

    async def add_menu_group(self, name: str) -> MenuGroup:
        model = MenuGroupModel(name=name)
        self.session.add(model)
        await _commit(self.session)
        return MenuGroup(id=model.id, name=model.name)

    async def add_menu(
        self,
        name: str,
        price: Decimal,
        menu_group_id: Optional[int] = None,
    ) -> Menu:
        model = MenuModel(name=name, price=Decimal(price), menu_group_id=menu_group_id)
        self.session.add(model)
        await _commit(self.session)
        return Menu(
            id=model.id,
            name=model.name,
            price=Decimal(model.price),
            menu_group_id=model.menu_group_id,
        )
