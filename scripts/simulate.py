"""
Order Lifecycle Simulation Script

Drives many orders through COOKING -> MEAL -> COMPLETION concurrently
against a running server. Seed menus and tables first (scripts/seed.py).
Run from project root: python scripts/simulate.py --tables 1,2,3 --menus 1,2,3,4
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Windows event loop fix
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Configuration
API_BASE_URL = "http://localhost:8080"
TOTAL_ORDERS = 50


def parse_ids(value: str) -> list[int]:
    return [int(part) for part in value.split(",") if part.strip()]


def generate_order_payload(table_ids: list[int], menu_ids: list[int]) -> dict[str, Any]:
    """Generate a random order; each menu appears at most once."""
    chosen = random.sample(menu_ids, k=random.randint(1, len(menu_ids)))
    return {
        "orderTableId": random.choice(table_ids),
        "orderLineItems": [
            {"menuId": menu_id, "quantity": random.randint(1, 4)}
            for menu_id in chosen
        ],
    }


async def run_order_lifecycle(
    client: httpx.AsyncClient,
    order_num: int,
    table_ids: list[int],
    menu_ids: list[int],
) -> dict[str, Any]:
    """Create one order, then move it to MEAL and COMPLETION."""
    start_time = time.time()
    statuses = []

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/orders",
            json=generate_order_payload(table_ids, menu_ids),
            timeout=30.0,
        )
        if response.status_code != 201:
            raise RuntimeError(f"create -> {response.status_code}: {response.text[:100]}")
        order = response.json()
        statuses.append(order["orderStatus"])

        for target in ("MEAL", "COMPLETION"):
            response = await client.put(
                f"{API_BASE_URL}/api/orders/{order['id']}/order-status",
                json={"orderStatus": target},
                timeout=30.0,
            )
            if response.status_code != 200:
                raise RuntimeError(f"{target} -> {response.status_code}: {response.text[:100]}")
            statuses.append(response.json()["orderStatus"])

        return {
            "order_num": order_num,
            "success": statuses == ["COOKING", "MEAL", "COMPLETION"],
            "order_id": order["id"],
            "statuses": statuses,
            "time": round(time.time() - start_time, 3),
        }
    except Exception as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "statuses": statuses,
            "time": round(time.time() - start_time, 3),
        }


async def run_simulation(
    table_ids: list[int],
    menu_ids: list[int],
    num_orders: int = TOTAL_ORDERS,
) -> dict[str, Any]:
    """
    Run num_orders lifecycles concurrently and print a summary.
    """
    print("=" * 70)
    print("🔥 ORDER LIFECYCLE SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        tasks = [
            run_order_lifecycle(client, i + 1, table_ids, menu_ids)
            for i in range(num_orders)
        ]
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Completed Lifecycles: {len(successful)}/{num_orders}")
    print(f"❌ Failed Lifecycles: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Average Lifecycle: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")

    if failed:
        print("\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']} after {f['statuses']}: {f.get('error', 'wrong status')}")

    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def preflight_check() -> bool:
    """Make sure the server answers before firing orders."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health", timeout=5.0)
        except httpx.HTTPError as e:
            print(f"❌ Server unreachable: {e}")
            return False

    if response.status_code != 200:
        print(f"❌ Health check failed: {response.text}")
        return False

    data = response.json()
    print(f"✅ Status: {data.get('status')} (storage: {data.get('storage_backend')})")
    return data.get("status") == "operational"


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Lifecycle Simulation")
    parser.add_argument("--tables", type=parse_ids, required=True, help="Comma-separated occupied table ids")
    parser.add_argument("--menus", type=parse_ids, required=True, help="Comma-separated menu ids")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--base-url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.base_url

    if not asyncio.run(preflight_check()):
        sys.exit(1)

    summary = asyncio.run(run_simulation(args.tables, args.menus, args.orders))
    sys.exit(0 if summary["failed"] == 0 else 1)
