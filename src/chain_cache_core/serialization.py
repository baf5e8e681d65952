"""JSON serialization boundary between Python values and stored bytes."""

from __future__ import annotations

import functools
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from chain_cache_core.exceptions import DecodeError, EncodeError

T = TypeVar("T")


def encode(value: object) -> bytes:
    """Serialize any JSON-representable value to bytes.

    Handles builtins, pydantic models, dataclasses, datetimes and UUIDs.

    Raises:
        EncodeError: If the value is unsupported or contains a cycle.
    """
    try:
        return to_json(value)
    except (PydanticSerializationError, ValueError, TypeError) as e:
        msg = f"Cannot encode {type(value).__name__} as JSON: {e}"
        raise EncodeError(msg, operation="encode") from e


def decode(data: bytes, target: type[T]) -> T:
    """Parse stored bytes and validate them against ``target``.

    Pass ``typing.Any`` to get plain JSON values back.

    Raises:
        DecodeError: If the bytes are not JSON or do not fit ``target``.
    """
    try:
        return _adapter(target).validate_json(data)
    except ValidationError as e:
        msg = f"Stored value does not match {_type_name(target)}: {e.error_count()} error(s)"
        raise DecodeError(msg, operation="decode") from e


@functools.lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:  # noqa: ANN401
    """Build (once per target) the TypeAdapter used for validation."""
    return TypeAdapter(target)


def _type_name(target: object) -> str:
    """Readable name for a target type, including generic aliases."""
    return getattr(target, "__name__", None) or repr(target)
