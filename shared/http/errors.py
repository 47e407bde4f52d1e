"""
Error taxonomy and the global handlers that turn every failure into an envelope.

    ApiError (HTTPException)
    ├── ValidationFailed   400
    ├── UnauthorizedError  401
    ├── ForbiddenError     403
    ├── NotFoundError      404
    └── ConflictError      409

Store failures that escape a handler are mapped here too: unique-constraint
violations become 409, missing rows become 404, anything else 500.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import responses

logger = structlog.get_logger(__name__)

# Leading location segments FastAPI adds that are not part of the payload path
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message


class ApiError(HTTPException):
    """An HTTPException that knows how to render itself as an envelope."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error: Optional[str] = None,
        headers: Optional[dict] = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.message = message
        self.error = error


class ValidationFailed(ApiError):
    def __init__(self, errors: Iterable[FieldError], message: str = "Validation failed"):
        self.errors = list(errors)
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            message,
            error=", ".join(str(e) for e in self.errors),
        )


class UnauthorizedError(ApiError):
    def __init__(self, message: str = "Unauthorized", error: Optional[str] = None):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            error=error,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(ApiError):
    def __init__(self, message: str = "Forbidden", error: Optional[str] = None):
        super().__init__(status.HTTP_403_FORBIDDEN, message, error=error)


class NotFoundError(ApiError):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found")
        self.resource = resource


class ConflictError(ApiError):
    def __init__(self, message: str = "Unique constraint violation", error: str = "Resource already exists"):
        super().__init__(status.HTTP_409_CONFLICT, message, error=error)


def field_errors_from_pydantic(errors: Iterable[dict]) -> list[FieldError]:
    """Flatten pydantic error dicts into `field.path: message` pairs.

    Locations already carry the camelCase aliases, e.g. `items.0.unitPrice`.
    """
    result = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        path = ".".join(str(p) for p in loc)
        result.append(FieldError(field=path, message=err.get("msg", "Invalid value")))
    return result


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info(
            "request_rejected",
            path=request.url.path,
            status_code=exc.status_code,
            message=exc.message,
        )
        return responses.error(
            exc.message, error=exc.error, status_code=exc.status_code, headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        failure = ValidationFailed(field_errors_from_pydantic(exc.errors()))
        logger.warning("validation_failed", path=request.url.path, error=failure.error)
        return responses.error(failure.message, error=failure.error, status_code=failure.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return responses.error(
                "Route not found",
                error=f"Cannot {request.method} {request.url.path}",
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return responses.error(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning("rate_limited", path=request.url.path, limit=str(exc.detail))
        return responses.error(
            "Too many requests",
            error=f"Rate limit exceeded: {exc.detail}",
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
        conflict = ConflictError()
        return responses.error(conflict.message, error=conflict.error, status_code=conflict.status_code)

    @app.exception_handler(NoResultFound)
    async def no_result_handler(request: Request, exc: NoResultFound):
        return responses.not_found("Resource")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
        return responses.server_error(str(exc))
