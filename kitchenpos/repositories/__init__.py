"""
Repository Factory

Provides a single entry point for obtaining repository instances.
Automatically selects the in-memory or SQL implementation based on the
STORAGE_BACKEND configuration.

Usage:
    from kitchenpos.repositories import get_repositories

    async with get_session_maker()() as session:
        orders, tables, menus = get_repositories(session)
        order = await orders.get(1)
"""

import logging
from functools import lru_cache
from typing import NamedTuple, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from kitchenpos.core.config import get_settings
from kitchenpos.repositories.base import MenuCatalog, OrderRepository, TableRegistry
from kitchenpos.repositories.memory import (
    InMemoryMenuCatalog,
    InMemoryOrderRepository,
    InMemoryTableRegistry,
)
from kitchenpos.repositories.sql import SqlMenuCatalog, SqlOrderRepository, SqlTableRegistry

logger = logging.getLogger(__name__)


class Repositories(NamedTuple):
    orders: OrderRepository
    tables: TableRegistry
    menus: MenuCatalog


@lru_cache()
def get_memory_repositories() -> Repositories:
    """
    Get the process-wide in-memory repositories.

    Cached so every request sees the same store.
    """
    logger.info("Repositories: Using in-memory store")
    return Repositories(
        orders=InMemoryOrderRepository(),
        tables=InMemoryTableRegistry(),
        menus=InMemoryMenuCatalog(),
    )


def get_repositories(session: Optional[AsyncSession] = None) -> Repositories:
    """
    Get the configured repositories.

    Args:
        session: Database session, required for the SQL backend

    Returns:
        Repositories: orders, tables and menus

    Raises:
        ValueError: If the SQL backend is configured but no session is given
    """
    if get_settings().use_memory_store:
        return get_memory_repositories()

    if session is None:
        raise ValueError("SQL repositories need a database session")
    return Repositories(
        orders=SqlOrderRepository(session),
        tables=SqlTableRegistry(session),
        menus=SqlMenuCatalog(session),
    )


def reset_memory_store() -> None:
    """
    Drop the cached in-memory repositories.

    Useful for testing; the next call starts from an empty store.
    """
    get_memory_repositories.cache_clear()
    logger.debug("In-memory store cleared")


__all__ = [
    "Repositories",
    "get_repositories",
    "get_memory_repositories",
    "reset_memory_store",
    "OrderRepository",
    "TableRegistry",
    "MenuCatalog",
    "InMemoryOrderRepository",
    "InMemoryTableRegistry",
    "InMemoryMenuCatalog",
    "SqlOrderRepository",
    "SqlTableRegistry",
    "SqlMenuCatalog",
]
