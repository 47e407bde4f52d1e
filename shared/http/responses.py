"""
Uniform JSON envelope returned by every endpoint:

    { success, message, data?, error?, pagination? }

Keys without a value are left out entirely rather than sent as null.
"""
from typing import Any, Generic, Mapping, Optional, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from shared.config.settings import is_development

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for wire models: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    error: Optional[str] = None
    pagination: Optional[PaginationMeta] = None


def _envelope(
    success: bool,
    message: str,
    data: Any = None,
    error: Optional[str] = None,
    pagination: Optional[PaginationMeta] = None,
) -> dict:
    body: dict = {"success": success, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data, by_alias=True)
    if error:
        body["error"] = error
    if pagination is not None:
        body["pagination"] = jsonable_encoder(pagination, by_alias=True)
    return body


def success(
    message: str,
    data: Any = None,
    status_code: int = status.HTTP_200_OK,
    pagination: Optional[PaginationMeta] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=_envelope(True, message, data=data, pagination=pagination),
    )


def error(
    message: str,
    error: Optional[str] = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=_envelope(False, message, error=error),
        headers=dict(headers) if headers else None,
    )


def not_found(resource: str = "Resource") -> JSONResponse:
    return error(f"{resource} not found", status_code=status.HTTP_404_NOT_FOUND)


def unauthorized(message: str = "Unauthorized") -> JSONResponse:
    return error(
        message,
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden(message: str = "Forbidden") -> JSONResponse:
    return error(message, status_code=status.HTTP_403_FORBIDDEN)


def server_error(detail: Optional[str] = None) -> JSONResponse:
    # Internal details only leave the process in development
    return error(
        "Internal server error",
        error=detail if is_development() else None,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
