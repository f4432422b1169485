"""
                        Services Module

Business logic on top of the repositories.

Services:
    - order_service: order creation and status lifecycle

Usage (FastAPI):
    @app.post("/api/orders")
    async def create_order(..., service: OrderService = Depends(get_order_service)):
        ...
"""

from typing import AsyncIterator

from kitchenpos.core.config import get_settings
from kitchenpos.database import get_session_maker
from kitchenpos.repositories import get_repositories
from kitchenpos.services.order_service import OrderService


async def get_order_service() -> AsyncIterator[OrderService]:
    """
    Dependency injection for FastAPI routes.

    Yields an OrderService wired to the configured repositories. With the
    SQL backend one session is opened per request and closed afterwards.
    """
    if get_settings().use_memory_store:
        yield OrderService(*get_repositories())
        return

    async with get_session_maker()() as session:
        try:
            yield OrderService(*get_repositories(session))
        finally:
            await session.close()


__all__ = ["OrderService", "get_order_service"]
