"""
SQLAlchemy Database Models

Tables backing the SQL repositories:
- menu_group / menu: the menu catalog
- order_table: seating units and their occupancy
- orders / order_line_item: orders and the menus ordered
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from kitchenpos.database import Base
from kitchenpos.domain import OrderStatus


class MenuGroupModel(Base):
    """Named group menus are listed under (set menus, drinks, ...)."""
    __tablename__ = "menu_group"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<MenuGroup #{self.id} - {self.name}>"


class MenuModel(Base):
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(19, 2), nullable=False)
    menu_group_id = Column(Integer, ForeignKey("menu_group.id"), nullable=True)

    def __repr__(self):
        return f"<Menu #{self.id} - {self.name} - {self.price}>"


class OrderTableModel(Base):
    __tablename__ = "order_table"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    table_group_id = Column(Integer, nullable=True)
    number_of_guests = Column(Integer, nullable=False, default=0)
    empty = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<OrderTable #{self.id} - guests={self.number_of_guests} - empty={self.empty}>"


class OrderModel(Base):
    """
    Main Order table.

    The status column is a database enum over OrderStatus, so only
    COOKING, MEAL and COMPLETION can ever be stored.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    order_table_id = Column(
        Integer,
        ForeignKey("order_table.id"),
        nullable=False,
        index=True,
    )
    order_status = Column(
        Enum(OrderStatus, name="order_status"),
        default=OrderStatus.COOKING,
        nullable=False,
        index=True,
    )
    ordered_time = Column(DateTime, nullable=False)

    order_line_items = relationship(
        "OrderLineItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLineItemModel.seq",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Order #{self.id} - table {self.order_table_id} - {self.order_status.value}>"


class OrderLineItemModel(Base):
    __tablename__ = "order_line_item"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="order_line_items")

    def __repr__(self):
        return f"<OrderLineItem #{self.seq} - menu {self.menu_id} x{self.quantity}>"
