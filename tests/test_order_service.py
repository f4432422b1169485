import pytest

from kitchenpos.core.exceptions import (
    InvalidOrderError,
    InvalidOrderStatusError,
    MenuNotFoundError,
    OrderAlreadyCompletedError,
    OrderNotFoundError,
    TableEmptyError,
    TableNotFoundError,
)
from kitchenpos.domain import OrderLineItem, OrderStatus


def line_items(*pairs):
    return [OrderLineItem(menu_id=menu_id, quantity=quantity) for menu_id, quantity in pairs]


async def test_create_order_starts_cooking(service, restaurant):
    chicken_set, beer = restaurant["chicken_set"], restaurant["beer"]

    order = await service.create_order(
        restaurant["table"].id,
        line_items((chicken_set.id, 1), (beer.id, 4)),
    )

    assert order.id is not None
    assert order.order_status is OrderStatus.COOKING
    assert order.order_table_id == restaurant["table"].id
    assert order.ordered_time is not None
    assert {(item.menu_id, item.quantity) for item in order.order_line_items} == {
        (chicken_set.id, 1),
        (beer.id, 4),
    }
    assert all(item.seq is not None for item in order.order_line_items)
    assert all(item.order_id == order.id for item in order.order_line_items)


async def test_create_order_without_line_items(service, restaurant, repositories):
    with pytest.raises(InvalidOrderError):
        await service.create_order(restaurant["table"].id, [])

    assert await repositories.orders.find_all() == []


async def test_create_order_with_non_positive_quantity(service, restaurant):
    with pytest.raises(InvalidOrderError):
        await service.create_order(
            restaurant["table"].id,
            line_items((restaurant["beer"].id, 0)),
        )


async def test_create_order_with_unknown_menu(service, restaurant, repositories):
    with pytest.raises(MenuNotFoundError):
        await service.create_order(
            restaurant["table"].id,
            line_items((restaurant["beer"].id, 1), (999, 1)),
        )

    assert await repositories.orders.find_all() == []


async def test_create_order_with_repeated_menu(service, restaurant):
    beer = restaurant["beer"]

    with pytest.raises(MenuNotFoundError):
        await service.create_order(
            restaurant["table"].id,
            line_items((beer.id, 1), (beer.id, 2)),
        )


async def test_create_order_on_unknown_table(service, restaurant):
    with pytest.raises(TableNotFoundError):
        await service.create_order(999, line_items((restaurant["beer"].id, 1)))


async def test_create_order_on_empty_table(service, restaurant, repositories):
    with pytest.raises(TableEmptyError):
        await service.create_order(
            restaurant["empty_table"].id,
            line_items((restaurant["beer"].id, 1)),
        )

    assert await repositories.orders.find_all() == []


async def test_checks_run_in_order(service, restaurant):
    # Empty table and unknown menu at once: the menu check wins.
    with pytest.raises(MenuNotFoundError):
        await service.create_order(restaurant["empty_table"].id, line_items((999, 1)))


async def test_status_lifecycle(service, restaurant):
    order = await service.create_order(
        restaurant["table"].id,
        line_items((restaurant["chicken_set"].id, 1), (restaurant["beer"].id, 4)),
    )

    meal = await service.change_order_status(order.id, OrderStatus.MEAL)
    assert meal.order_status is OrderStatus.MEAL
    assert meal.order_line_items == order.order_line_items

    completed = await service.change_order_status(order.id, OrderStatus.COMPLETION)
    assert completed.order_status is OrderStatus.COMPLETION


@pytest.mark.parametrize("target", [OrderStatus.MEAL, OrderStatus.COMPLETION])
async def test_completed_order_cannot_change(service, restaurant, target):
    order = await service.create_order(restaurant["table"].id, line_items((restaurant["beer"].id, 1)))
    await service.change_order_status(order.id, OrderStatus.COMPLETION)

    with pytest.raises(OrderAlreadyCompletedError):
        await service.change_order_status(order.id, target)

    assert (await service.get_order(order.id)).order_status is OrderStatus.COMPLETION


async def test_cooking_cannot_be_requested(service, restaurant):
    order = await service.create_order(restaurant["table"].id, line_items((restaurant["beer"].id, 1)))
    await service.change_order_status(order.id, OrderStatus.MEAL)

    with pytest.raises(InvalidOrderStatusError):
        await service.change_order_status(order.id, OrderStatus.COOKING)

    assert (await service.get_order(order.id)).order_status is OrderStatus.MEAL


async def test_cooking_may_skip_straight_to_completion(service, restaurant):
    # Documented leniency: no MEAL step is required.
    order = await service.create_order(restaurant["table"].id, line_items((restaurant["beer"].id, 1)))

    completed = await service.change_order_status(order.id, OrderStatus.COMPLETION)

    assert completed.order_status is OrderStatus.COMPLETION


async def test_change_status_of_unknown_order(service):
    with pytest.raises(OrderNotFoundError):
        await service.change_order_status(42, OrderStatus.MEAL)


async def test_get_order_is_stable_between_changes(service, restaurant):
    order = await service.create_order(restaurant["table"].id, line_items((restaurant["beer"].id, 2)))
    await service.change_order_status(order.id, OrderStatus.MEAL)

    first = await service.get_order(order.id)
    second = await service.get_order(order.id)

    assert first == second
    assert first.order_status is OrderStatus.MEAL


async def test_get_unknown_order(service):
    with pytest.raises(OrderNotFoundError):
        await service.get_order(1)


async def test_list_orders_in_creation_order(service, restaurant):
    beer = restaurant["beer"]
    first = await service.create_order(restaurant["table"].id, line_items((beer.id, 1)))
    second = await service.create_order(restaurant["table"].id, line_items((beer.id, 2)))

    orders = await service.list_orders()

    assert [order.id for order in orders] == [first.id, second.id]


async def test_memory_catalog_lookups(repositories, restaurant):
    menus = repositories.menus

    assert await menus.menu_exists(restaurant["beer"].id)
    assert not await menus.menu_exists(999)
    assert await menus.count_existing([restaurant["beer"].id, restaurant["beer"].id, 999]) == 1


async def test_memory_save_refuses_completed_order(service, restaurant, repositories):
    order = await service.create_order(restaurant["table"].id, line_items((restaurant["beer"].id, 1)))
    stale = await repositories.orders.get(order.id)
    await service.change_order_status(order.id, OrderStatus.COMPLETION)

    stale.order_status = OrderStatus.MEAL
    with pytest.raises(OrderAlreadyCompletedError):
        await repositories.orders.save(stale)

    assert (await service.get_order(order.id)).order_status is OrderStatus.COMPLETION
