import os
from decimal import Decimal

# Must be set before kitchenpos reads its settings
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENV_MODE"] = "development"

import httpx
import pytest

from kitchenpos.core.config import get_settings
from kitchenpos.main import app
from kitchenpos.repositories import get_memory_repositories, reset_memory_store
from kitchenpos.services import OrderService


@pytest.fixture(autouse=True)
def memory_store():
    get_settings.cache_clear()
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def repositories():
    return get_memory_repositories()


@pytest.fixture
def service(repositories):
    return OrderService(repositories.orders, repositories.tables, repositories.menus)


@pytest.fixture
async def restaurant(repositories):
    """One occupied table, one empty table, a 16,000 set menu and a 4,000 beer."""
    set_menus = await repositories.menus.add_menu_group("Set Menu")
    drinks = await repositories.menus.add_menu_group("Drinks")
    chicken_set = await repositories.menus.add_menu("Chicken Set", Decimal("16000"), set_menus.id)
    beer = await repositories.menus.add_menu("Beer 500cc", Decimal("4000"), drinks.id)

    table = await repositories.tables.add_table()
    await repositories.tables.change_empty(table.id, False)
    empty_table = await repositories.tables.add_table()

    return {
        "table": table,
        "empty_table": empty_table,
        "chicken_set": chicken_set,
        "beer": beer,
    }


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
