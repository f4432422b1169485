"""
Pydantic Schemas for Request/Response Validation

JSON bodies use camelCase (orderTableId, orderLineItems, ...);
Python code uses the snake_case field names.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kitchenpos.domain import Order, OrderLineItem, OrderStatus

# order_line_item.quantity is a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderLineItemCreate(CamelModel):
    """Single line item in an order."""
    menu_id: int = Field(..., examples=[1])
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, examples=[2])

    def to_domain(self) -> OrderLineItem:
        return OrderLineItem(menu_id=self.menu_id, quantity=self.quantity)


class OrderCreate(CamelModel):
    """
    Request schema for creating a new order.

    An empty orderLineItems list passes schema validation on purpose and
    is rejected by the order service as an invalid order.
    """
    order_table_id: int = Field(..., examples=[1])
    order_line_items: List[OrderLineItemCreate] = Field(default_factory=list)


class OrderStatusChange(CamelModel):
    order_status: OrderStatus = Field(..., examples=["MEAL"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderLineItemResponse(CamelModel):
    seq: int
    order_id: int
    menu_id: int
    quantity: int


class OrderResponse(CamelModel):
    """Response schema for a single order."""
    id: int
    order_table_id: int
    order_status: OrderStatus
    ordered_time: datetime
    order_line_items: List[OrderLineItemResponse]

    @classmethod
    def from_order(cls, order: Order) -> "OrderResponse":
        return cls.model_validate(order)


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    storage_backend: str
    database: str
    timestamp: datetime
