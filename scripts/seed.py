"""
Seed Script

Registers menu groups, menus and occupied tables in the configured SQL
store so the order API (and simulate.py) has something to order against.
Run from project root: python scripts/seed.py --tables 5
"""

import argparse
import asyncio
import os
import sys
from decimal import Decimal

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from kitchenpos.core.config import get_settings
from kitchenpos.database import dispose_engine, get_session_maker, init_db
from kitchenpos.repositories import get_repositories

# (group, menu name, price)
MENUS = [
    ("Set Menu", "Fried Chicken Set", Decimal("16000")),
    ("Set Menu", "Spicy Chicken Set", Decimal("17000")),
    ("Drinks", "Beer 500cc", Decimal("4000")),
    ("Drinks", "Cola", Decimal("2000")),
]


async def seed(num_tables: int, guests: int) -> dict[str, list[int]]:
    """Create the sample menus and num_tables occupied tables."""
    await init_db()

    async with get_session_maker()() as session:
        _, tables, menus = get_repositories(session)

        group_ids: dict[str, int] = {}
        menu_ids = []
        for group_name, menu_name, price in MENUS:
            if group_name not in group_ids:
                group = await menus.add_menu_group(group_name)
                group_ids[group_name] = group.id
            menu = await menus.add_menu(menu_name, price, group_ids[group_name])
            menu_ids.append(menu.id)
            print(f"   🍗 Menu #{menu.id}: {menu_name} ({price})")

        table_ids = []
        for _ in range(num_tables):
            table = await tables.add_table(number_of_guests=guests, empty=False)
            table_ids.append(table.id)
            print(f"   🪑 Table #{table.id}: {guests} guests")

    await dispose_engine()
    return {"menu_ids": menu_ids, "table_ids": table_ids}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed menus and tables")
    parser.add_argument("--tables", type=int, default=5, help="Number of occupied tables")
    parser.add_argument("--guests", type=int, default=2, help="Guests seated per table")
    args = parser.parse_args()

    if get_settings().use_memory_store:
        print("❌ STORAGE_BACKEND=memory: seed data would vanish with this process.")
        sys.exit(1)

    print("=" * 60)
    print("🌱 SEEDING KITCHEN POS")
    print("=" * 60)
    ids = asyncio.run(seed(args.tables, args.guests))
    print("=" * 60)
    print(f"Menus:  {','.join(str(i) for i in ids['menu_ids'])}")
    print(f"Tables: {','.join(str(i) for i in ids['table_ids'])}")
    print("=" * 60)
