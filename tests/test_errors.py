"""Global error mapping: everything leaves the app as an envelope.

Invariants:
    - Unknown paths and methods answer 404 "Route not found"
    - Malformed bodies are 400 validation failures, not 422
    - /metrics is public and carries the business counters
    - Domain errors render their own status; anything unexpected is a 500
      whose detail is only shown in development
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from shared.http import responses
from shared.http.errors import ForbiddenError, register_error_handlers


@pytest.fixture
async def bare_client():
    """Minimal app with only the global handlers, and routes that fail on purpose."""
    bare = FastAPI()
    register_error_handlers(bare)

    @bare.get("/forbidden")
    async def forbidden_route():
        raise ForbiddenError("Admins only")

    @bare.get("/explode")
    async def explode_route():
        raise RuntimeError("database unreachable")

    # ServerErrorMiddleware re-raises after responding; keep the response instead
    transport = ASGITransport(app=bare, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def test_unknown_route(client):
    res = await client.get("/nope")

    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "message": "Route not found",
        "error": "Cannot GET /nope",
    }


async def test_unsupported_method_is_route_not_found(client, auth_headers):
    res = await client.patch("/customers", headers=auth_headers, json={})

    assert res.status_code == 404
    assert res.json()["error"] == "Cannot PATCH /customers"


async def test_malformed_json_body(client, auth_headers):
    res = await client.post(
        "/customers",
        headers={**auth_headers, "Content-Type": "application/json"},
        content=b"{not json",
    )

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert res.json()["message"] == "Validation failed"


async def test_validation_error_lists_all_fields(client, auth_headers):
    res = await client.post("/customers", headers=auth_headers, json={})

    assert res.status_code == 400
    error = res.json()["error"]
    for field in ("firstName", "lastName", "email"):
        assert f"{field}: " in error


async def test_metrics_exposed(client, create_customer, create_order):
    customer = await create_customer()
    await create_order(customer["id"])

    res = await client.get("/metrics")

    assert res.status_code == 200
    assert "oms_orders_created_total" in res.text
    assert "oms_order_amount" in res.text


async def test_forbidden_error_envelope(bare_client):
    res = await bare_client.get("/forbidden")

    assert res.status_code == 403
    assert res.json() == {"success": False, "message": "Admins only"}


async def test_unhandled_exception_hides_detail(bare_client):
    res = await bare_client.get("/explode")

    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Internal server error"}


async def test_unhandled_exception_shows_detail_in_development(bare_client, monkeypatch):
    monkeypatch.setattr(responses, "is_development", lambda: True)
    res = await bare_client.get("/explode")

    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "message": "Internal server error",
        "error": "database unreachable",
    }
