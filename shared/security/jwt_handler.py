from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from shared.config.settings import JWT_ALGORITHM, JWT_EXPIRES_MINUTES, JWT_SECRET_KEY


class InvalidTokenError(Exception):
    """Token failed signature, expiry or claim checks."""


@dataclass(frozen=True)
class TokenIdentity:
    user_id: str
    email: str


def create_access_token(user_id: str, email: str, expires_delta: timedelta = None) -> str:
    """Creates a JWT access token with a UTC expiration."""
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=JWT_EXPIRES_MINUTES)

    to_encode = {"userId": user_id, "email": email, "iat": now, "exp": expire}
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_access_token(token: str) -> TokenIdentity:
    """Decodes and verifies the JWT. Raises InvalidTokenError if invalid, tampered or expired."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    user_id = payload.get("userId")
    email = payload.get("email")
    if not user_id or not email:
        raise InvalidTokenError("Token is missing identity claims")

    return TokenIdentity(user_id=str(user_id), email=str(email))
