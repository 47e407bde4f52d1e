"""Shared fixtures: in-memory database, ASGI client, seeded admin and its token.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Settings are pinned through the environment before the app is imported
    - The app's Database is swapped on app.state (ASGITransport skips lifespan)
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from main import app
from services.auth_service.service import AuthService
from shared.config.database import Database
from shared.security import create_access_token

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
async def database():
    # One shared connection, otherwise each connection sees its own empty :memory: db
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture
async def client(database):
    app.state.db = database
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def admin_user(database):
    async with database.session() as db:
        return await AuthService.create_user(db, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def auth_headers(admin_user):
    token = create_access_token(user_id=admin_user.id, email=admin_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create_customer(client, auth_headers):
    """Factory: POST a customer and return its `data` payload."""
    counter = {"n": 0}

    async def _create(**overrides):
        counter["n"] += 1
        body = {
            "firstName": "Alice",
            "lastName": "Wilson",
            "email": f"customer{counter['n']}@example.com",
        }
        body.update(overrides)
        res = await client.post("/customers", json=body, headers=auth_headers)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _create


@pytest.fixture
def create_order(client, auth_headers):
    """Factory: POST an order for `customer_id` and return its `data` payload."""

    async def _create(customer_id, items=None, **overrides):
        body = {
            "customerId": customer_id,
            "items": items or [{"productName": "Laptop", "quantity": 1, "unitPrice": 999.99}],
        }
        body.update(overrides)
        res = await client.post("/orders", json=body, headers=auth_headers)
        assert res.status_code == 201, res.text
        return res.json()["data"]

    return _create
