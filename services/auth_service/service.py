"""
Login against seeded users.

Unknown email and wrong password fail identically, in both message and
timing, so the endpoint cannot be used to probe which accounts exist.
"""
import asyncio

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.http.errors import UnauthorizedError
from shared.observability import oms_login_attempts_total
from shared.security import create_access_token, dummy_verify, hash_password, verify_password

from .models import User
from .repository import UserRepository
from .schemas import LoginRequest, LoginResponse, UserResponse

logger = structlog.get_logger(__name__)


class AuthService:

    # bcrypt is CPU-bound; run it off the event loop
    @staticmethod
    async def create_user(db: AsyncSession, email: str, password: str) -> User:
        hashed = await asyncio.to_thread(hash_password, password)
        return await UserRepository.create(db, User(email=email, password=hashed))

    @staticmethod
    async def login(db: AsyncSession, data: LoginRequest) -> LoginResponse:
        user = await UserRepository.get_by_email(db, data.email)

        if user is None:
            await asyncio.to_thread(dummy_verify)
            valid = False
        else:
            valid = await asyncio.to_thread(verify_password, data.password, user.password)

        if not valid:
            oms_login_attempts_total.labels(outcome="failed").inc()
            logger.warning("login_failed")
            raise UnauthorizedError("Login failed", error="Invalid credentials")

        oms_login_attempts_total.labels(outcome="success").inc()
        logger.info("login_succeeded", user_id=user.id)

        token = create_access_token(user_id=user.id, email=user.email)
        return LoginResponse(token=token, user=UserResponse.model_validate(user))
