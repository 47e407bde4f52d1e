"""Credential utilities: password hashing and bearer tokens.

Invariants:
    - Hashes are salted: hashing the same password twice gives different strings
    - A token decodes back to the identity it was issued for
    - Expired, foreign-signed and claim-less tokens all raise InvalidTokenError
"""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from shared.config.settings import JWT_ALGORITHM, JWT_SECRET_KEY
from shared.security import (
    InvalidTokenError,
    create_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)


def test_hash_is_salted_and_verifies():
    first = hash_password("admin123")
    second = hash_password("admin123")

    assert first != second
    assert first != "admin123"
    assert verify_password("admin123", first)
    assert verify_password("admin123", second)


def test_wrong_password_does_not_verify():
    assert not verify_password("admin124", hash_password("admin123"))


def test_token_round_trip():
    token = create_access_token(user_id="user-1", email="admin@example.com")
    identity = verify_access_token(token)

    assert identity.user_id == "user-1"
    assert identity.email == "admin@example.com"


def test_token_carries_expiry():
    token = create_access_token(user_id="user-1", email="a@example.com", expires_delta=timedelta(minutes=5))
    claims = jwt.get_unverified_claims(token)

    assert claims["userId"] == "user-1"
    assert claims["exp"] > datetime.now(timezone.utc).timestamp()


def test_expired_token_rejected():
    token = create_access_token(user_id="user-1", email="a@example.com", expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


def test_token_signed_with_another_key_rejected():
    token = jwt.encode(
        {"userId": "user-1", "email": "a@example.com"}, "some-other-key", algorithm=JWT_ALGORITHM,
    )
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


def test_token_without_identity_claims_rejected():
    token = jwt.encode({"sub": "user-1"}, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


def test_garbage_token_rejected():
    with pytest.raises(InvalidTokenError):
        verify_access_token("not-a-jwt")
