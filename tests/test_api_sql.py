import asyncio
from decimal import Decimal

import httpx
import pytest

from kitchenpos.core.config import get_settings
from kitchenpos.database import dispose_engine, get_session_maker
from kitchenpos.main import app, lifespan
from kitchenpos.repositories import SqlMenuCatalog, SqlTableRegistry


@pytest.fixture
async def sql_client(monkeypatch, tmp_path):
    """Client for the app running on the SQL backend, lifespan included."""
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'kitchenpos.db'}")
    get_settings.cache_clear()
    await dispose_engine()

    async with lifespan(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

    await dispose_engine()
    get_settings.cache_clear()


@pytest.fixture
async def sql_restaurant(sql_client):
    async with get_session_maker()() as session:
        menus = SqlMenuCatalog(session)
        tables = SqlTableRegistry(session)
        group = await menus.add_menu_group("Set Menu")
        chicken_set = await menus.add_menu("Chicken Set", Decimal("16000"), group.id)
        beer = await menus.add_menu("Beer 500cc", Decimal("4000"), group.id)
        table = await tables.add_table()
        table = await tables.change_empty(table.id, False)
    return {"table": table, "chicken_set": chicken_set, "beer": beer}


async def test_health_reports_database(sql_client):
    body = (await sql_client.get("/health")).json()

    assert body["status"] == "operational"
    assert body["storage_backend"] == "sql"
    assert body["database"] == "healthy"


async def test_manage_order_of_one_table_on_database(sql_client, sql_restaurant):
    chicken_set, beer = sql_restaurant["chicken_set"], sql_restaurant["beer"]

    response = await sql_client.post(
        "/api/orders",
        json={
            "orderTableId": sql_restaurant["table"].id,
            "orderLineItems": [
                {"menuId": chicken_set.id, "quantity": 1},
                {"menuId": beer.id, "quantity": 4},
            ],
        },
    )
    assert response.status_code == 201
    order = response.json()
    assert order["orderStatus"] == "COOKING"
    assert order["orderTableId"] == sql_restaurant["table"].id
    assert {(item["menuId"], item["quantity"]) for item in order["orderLineItems"]} == {
        (chicken_set.id, 1),
        (beer.id, 4),
    }

    for status in ("MEAL", "COMPLETION"):
        response = await sql_client.put(
            f"/api/orders/{order['id']}/order-status", json={"orderStatus": status}
        )
        assert response.status_code == 200
        assert response.json()["orderStatus"] == status

    response = await sql_client.put(
        f"/api/orders/{order['id']}/order-status", json={"orderStatus": "MEAL"}
    )
    assert response.status_code == 409

    fetched = (await sql_client.get(f"/api/orders/{order['id']}")).json()
    assert fetched["orderStatus"] == "COMPLETION"
    assert fetched["orderLineItems"] == order["orderLineItems"]


async def test_concurrent_requests_keep_completion_terminal(sql_client, sql_restaurant):
    for _ in range(5):
        order = (
            await sql_client.post(
                "/api/orders",
                json={
                    "orderTableId": sql_restaurant["table"].id,
                    "orderLineItems": [{"menuId": sql_restaurant["beer"].id, "quantity": 1}],
                },
            )
        ).json()

        responses = await asyncio.gather(
            sql_client.put(f"/api/orders/{order['id']}/order-status", json={"orderStatus": "COMPLETION"}),
            sql_client.put(f"/api/orders/{order['id']}/order-status", json={"orderStatus": "MEAL"}),
        )

        assert {response.status_code for response in responses} <= {200, 409}
        fetched = (await sql_client.get(f"/api/orders/{order['id']}")).json()
        assert fetched["orderStatus"] == "COMPLETION"
