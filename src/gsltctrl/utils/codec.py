"""JSON encoding and decoding for Web API payloads."""
from typing import Type, TypeVar
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError
from gsltctrl.exceptions import DecodeError, EncodeError
from gsltctrl.models.game_server import ResponseEnvelope

M = TypeVar("M", bound=BaseModel)


def encode(value: BaseModel) -> str:
    """Serialize a payload model to compact JSON, e.g. {"appid":730,"memo":"x"}."""
    try:
        return value.model_dump_json()
    except PydanticSerializationError as e:
        raise EncodeError(f"Error while formatting JSON: {e}") from e


def decode(text: str, model: Type[M]) -> M:
    """Parse JSON text into ``model``; unknown fields are ignored."""
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(text, e) from e


def unwrap(text: str, model: Type[M]) -> M:
    """Decode a {"response": ...} envelope and return the inner payload."""
    return decode(text, ResponseEnvelope[model]).response
