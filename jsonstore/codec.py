from __future__ import annotations

import math
from typing import Any, Generic, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from .errors import DecodeError, EncodeError

T = TypeVar("T")


class Codec(Protocol[T]):
    """
    Encode/decode pair fixing the element type of a store.
    """

    def encode(self, value: T) -> bytes:
        """Serialize one value to its JSON bytes."""
        ...

    def decode(self, raw: bytes) -> T:
        """Parse JSON bytes back into a value."""
        ...


def _reject_non_finite(obj: Any) -> None:
    # JSON has no NaN/Infinity; pydantic would quietly write them as null
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError(f"non-finite float {obj!r} is not valid JSON")
    elif isinstance(obj, dict):
        for v in obj.values():
            _reject_non_finite(v)
    elif isinstance(obj, (list, tuple, set, frozenset)):
        for v in obj:
            _reject_non_finite(v)


class PydanticCodec(Generic[T]):
    """
    Codec backed by a pydantic TypeAdapter.

    Handles builtins, containers, dataclasses, TypedDicts and BaseModel
    subclasses alike. Values that do not match the adapter's type are
    rejected on encode rather than serialized best-effort.
    """

    def __init__(self, tp: Any = Any):
        self._type = tp
        self._adapter: TypeAdapter[T] = TypeAdapter(tp)

    @property
    def type(self) -> Any:
        return self._type

    def encode(self, value: T) -> bytes:
        try:
            _reject_non_finite(self._adapter.dump_python(value, warnings="error"))
            return self._adapter.dump_json(value, warnings="error")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise EncodeError(f"cannot encode {type(value).__name__} value as {self._type!r}: {e}") from e

    def decode(self, raw: bytes) -> T:
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            raise DecodeError(f"cannot decode entry as {self._type!r}: {e}") from e

    def __repr__(self) -> str:
        return f"PydanticCodec({self._type!r})"
