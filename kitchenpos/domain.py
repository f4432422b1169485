"""
Domain Types

Plain dataclasses shared by the repositories and the order service.
Neither the in-memory nor the SQL store leaks its own objects past the
repository boundary; both hand back these.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


class OrderStatus(str, enum.Enum):
    """Order status workflow."""
    COOKING = "COOKING"
    MEAL = "MEAL"
    COMPLETION = "COMPLETION"

    @property
    def is_terminal(self) -> bool:
        return not TRANSITIONS[self]

    def can_transition_to(self, target: "OrderStatus") -> bool:
        return target in TRANSITIONS[self]


# Targets reachable through a status change. COOKING is only ever set on
# creation. Beyond that the only rule is that COMPLETION is terminal, so
# COOKING -> COMPLETION and MEAL -> MEAL are both allowed.
TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.COOKING: frozenset({OrderStatus.MEAL, OrderStatus.COMPLETION}),
    OrderStatus.MEAL: frozenset({OrderStatus.MEAL, OrderStatus.COMPLETION}),
    OrderStatus.COMPLETION: frozenset(),
}


@dataclass
class OrderLineItem:
    """One (menu, quantity) entry of an order. seq is assigned on save."""
    menu_id: int
    quantity: int
    seq: Optional[int] = None
    order_id: Optional[int] = None


@dataclass
class Order:
    order_table_id: int
    order_status: OrderStatus
    ordered_time: datetime
    order_line_items: list[OrderLineItem] = field(default_factory=list)
    id: Optional[int] = None


@dataclass
class OrderTable:
    """
    A seating unit.

    Defaults match a freshly created table: empty, nobody seated.
    """
    id: Optional[int] = None
    table_group_id: Optional[int] = None
    number_of_guests: int = 0
    empty: bool = True


@dataclass
class MenuGroup:
    name: str
    id: Optional[int] = None


@dataclass
class Menu:
    name: str
    price: Decimal
    menu_group_id: Optional[int] = None
    id: Optional[int] = None
