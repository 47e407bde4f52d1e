from datetime import datetime

from pydantic import EmailStr, Field

from shared.http.responses import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserResponse(CamelModel):
    id: str
    email: str
    created_at: datetime


class LoginResponse(CamelModel):
    token: str
    user: UserResponse
