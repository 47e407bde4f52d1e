from passlib.context import CryptContext

from shared.config.settings import BCRYPT_ROUNDS

_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """One-way salted bcrypt hash. Two calls with the same input differ."""
    return _pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return _pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend the same time a real verify would, for lookups that found no user."""
    _pwd_context.dummy_verify()
