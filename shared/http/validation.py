from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationFailed, field_errors_from_pydantic

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_payload(schema: Type[ModelT], data: Any) -> ModelT:
    """Parse `data` against `schema`.

    Returns the typed, coerced model. On failure raises ValidationFailed
    listing every violated constraint, not just the first one.
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationFailed(field_errors_from_pydantic(e.errors())) from e
