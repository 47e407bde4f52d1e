from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.config.settings import LOGIN_RATE_LIMIT
from shared.http import responses
from shared.http.responses import ApiResponse
from shared.security import limiter

from .schemas import LoginRequest, LoginResponse
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    summary="Authenticate and receive a JWT access token",
)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(
    request: Request,                          # REQUIRED: slowapi needs this to check IP/Headers
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    result = await AuthService.login(db, payload)
    return responses.success("Login successful", result)
