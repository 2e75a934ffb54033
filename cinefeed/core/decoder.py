from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import DecodingError

T = TypeVar("T", bound=BaseModel)

def decode(data: bytes, model: Type[T]) -> T:
    """Parse a JSON body into ``model``.

    Extra fields are ignored by the schemas themselves; missing optional
    fields become None. Anything else raises DecodingError.
    """
    try:
        return model.model_validate_json(data)
    except ValidationError as e:
        raise DecodingError(f"Failed to decode response: {e.error_count()} validation error(s) for {model.__name__}")
