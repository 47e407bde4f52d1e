"""
End-to-end smoke run against a live server (not collected by pytest).

    uvicorn main:app --port 8000
    python -m scripts.seed
    python tests/run_smoke.py
"""
import asyncio
import os
import re
import sys

import httpx
from termcolor import colored

# Configuration
BASE_URL = os.getenv("SMOKE_BASE_URL", "http://localhost:8000")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

ORDER_NUMBER = re.compile(r"^ORD-\d{4}-\d{6}$")


class SmokeFailure(Exception):
    pass


def check(condition: bool, message: str):
    if not condition:
        raise SmokeFailure(message)


async def login(client: httpx.AsyncClient) -> str:
    resp = await client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    check(resp.status_code == 200, f"login returned {resp.status_code}: {resp.text}")
    return resp.json()["data"]["token"]


async def run_scenario(client: httpx.AsyncClient):
    resp = await client.get("/health")
    check(resp.status_code == 200, f"health returned {resp.status_code}")
    print(f"   Health: {colored(resp.json()['message'], 'blue')}")

    resp = await client.get("/customers")
    check(resp.status_code == 401, "customers without a token should be rejected")

    client.headers["Authorization"] = f"Bearer {await login(client)}"

    resp = await client.post("/customers", json={
        "firstName": "Alice",
        "lastName": "Wilson",
        "email": f"alice.wilson.{os.getpid()}@example.com",
    })
    check(resp.status_code == 201, f"create customer returned {resp.status_code}: {resp.text}")
    customer_id = resp.json()["data"]["id"]
    print(f"   Customer: {colored(customer_id, 'blue')}")

    resp = await client.post("/orders", json={
        "customerId": customer_id,
        "items": [{"productName": "Laptop", "quantity": 1, "unitPrice": 999.99}],
    })
    check(resp.status_code == 201, f"create order returned {resp.status_code}: {resp.text}")
    order = resp.json()["data"]
    check(order["totalAmount"] == 999.99, f"unexpected total {order['totalAmount']}")
    check(bool(ORDER_NUMBER.match(order["orderNumber"])), f"bad order number {order['orderNumber']}")
    print(f"   Order: {colored(order['orderNumber'], 'blue')}")

    resp = await client.get(f"/orders/{order['id']}")
    check(resp.status_code == 200, f"get order returned {resp.status_code}")
    fetched = resp.json()["data"]
    check(fetched["totalAmount"] == order["totalAmount"], "totals differ after re-fetch")
    check(fetched["items"][0]["totalPrice"] == 999.99, "item total differs after re-fetch")

    resp = await client.delete(f"/customers/{customer_id}")
    check(resp.status_code == 200, f"delete customer returned {resp.status_code}")
    check(resp.json()["data"]["deletedOrdersCount"] == 1, "expected one cascaded order")

    resp = await client.get(f"/orders/{order['id']}")
    check(resp.status_code == 404, "order should be gone with its customer")


async def main() -> int:
    print(colored(f"⚙️  Smoke testing {BASE_URL}", "cyan"))
    async with httpx.AsyncClient(base_url=BASE_URL, timeout=30.0) as client:
        try:
            await run_scenario(client)
        except (SmokeFailure, httpx.HTTPError) as e:
            print(f"   ❌ {colored('FAIL', 'red')} | {e}")
            return 1

    print(f"   ✅ {colored('PASS', 'green')} | Alice Wilson scenario completed")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
