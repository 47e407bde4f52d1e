"""Login and the bearer-token gate.

Invariants:
    - Correct credentials return a token that decodes to the same user
    - Unknown email and wrong password fail with the same message and error
    - Protected routes reject missing, expired and tampered tokens with 401
    - The gate runs before body validation
"""

from datetime import timedelta

from shared.security import create_access_token, verify_access_token

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"


async def test_login_returns_token_and_user(client, admin_user):
    res = await client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["user"]["email"] == ADMIN_EMAIL
    assert "password" not in body["data"]["user"]

    identity = verify_access_token(body["data"]["token"])
    assert identity.user_id == admin_user.id
    assert identity.email == ADMIN_EMAIL


async def test_wrong_password_and_unknown_email_fail_alike(client, admin_user):
    wrong_password = await client.post(
        "/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"},
    )
    unknown_email = await client.post(
        "/auth/login", json={"email": "nobody@example.com", "password": ADMIN_PASSWORD},
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "message": "Login failed",
        "error": "Invalid credentials",
    }


async def test_login_validates_payload(client):
    res = await client.post("/auth/login", json={"email": "not-an-email", "password": "123"})

    assert res.status_code == 400
    assert res.json()["message"] == "Validation failed"
    assert "email" in res.json()["error"]
    assert "password" in res.json()["error"]


async def test_missing_token_rejected(client):
    res = await client.get("/customers")

    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Access token required"}
    assert res.headers["www-authenticate"] == "Bearer"


async def test_expired_token_rejected(client, admin_user):
    token = create_access_token(admin_user.id, admin_user.email, expires_delta=timedelta(seconds=-5))
    res = await client.get("/orders", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["message"] == "Invalid or expired token"


async def test_tampered_token_rejected(client, auth_headers):
    header, payload, signature = auth_headers["Authorization"].split(" ", 1)[1].split(".")
    forged = ".".join([header, payload, signature[::-1]])
    res = await client.get("/customers", headers={"Authorization": f"Bearer {forged}"})

    assert res.status_code == 401
    assert res.json()["message"] == "Invalid or expired token"


async def test_non_bearer_scheme_rejected(client):
    res = await client.get("/customers", headers={"Authorization": "Basic YWRtaW46YWRtaW4="})

    assert res.status_code == 401
    assert res.json()["message"] == "Access token required"


async def test_auth_checked_before_body_validation(client):
    res = await client.post("/orders", json={"items": []})

    assert res.status_code == 401


async def test_health_is_public(client):
    res = await client.get("/health")

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Order Management API is running"
    assert set(body["data"]) == {"timestamp", "version"}
