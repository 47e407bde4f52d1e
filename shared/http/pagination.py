import math
from typing import Any, Optional

from fastapi import Query
from pydantic import BaseModel, field_validator

from .responses import PaginationMeta

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Largest page whose offset still fits a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


def _positive_int(value: Any, upper: Optional[int] = None) -> Optional[int]:
    if value is None:
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    if parsed <= 0 or (upper is not None and parsed > upper):
        return None
    return parsed


class PaginationParams(BaseModel):
    """page/limit arrive as optional query strings; anything that is not a
    positive integer falls back to the defaults instead of failing."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @field_validator("page", mode="before")
    @classmethod
    def coerce_page(cls, v):
        return _positive_int(v, upper=MAX_PAGE) or DEFAULT_PAGE

    @field_validator("limit", mode="before")
    @classmethod
    def coerce_limit(cls, v):
        return min(_positive_int(v) or DEFAULT_LIMIT, MAX_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> PaginationMeta:
        return PaginationMeta(
            page=self.page,
            limit=self.limit,
            total=total,
            total_pages=math.ceil(total / self.limit),
        )


def get_pagination(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Items per page (max 100)"),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)
