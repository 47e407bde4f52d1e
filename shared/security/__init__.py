from .jwt_handler import InvalidTokenError, TokenIdentity, create_access_token, verify_access_token
from .passwords import dummy_verify, hash_password, verify_password
from .dependencies import get_current_user
from .rate_limiter import limiter, user_id_or_ip

__all__ = [
    "InvalidTokenError",
    "TokenIdentity",
    "create_access_token",
    "verify_access_token",
    "hash_password",
    "verify_password",
    "dummy_verify",
    "get_current_user",
    "limiter",
    "user_id_or_ip"
]
