from functools import lru_cache
from typing import Any, Protocol, Type, TypeVar, Union, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")


@runtime_checkable
class DocumentSerializer(Protocol):
    def serialize(self, document: Any) -> str: ...

    def deserialize(self, data: Union[str, bytes, Any], model: Type[T]) -> T: ...


@lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


class PydanticSerializer:
    """
    Default serializer: compact JSON through pydantic ``TypeAdapter``, so pydantic models, dataclasses, typed dicts
    and plain ``dict``/``list`` documents all round-trip.
    """

    def __init__(self, by_alias: bool = True, exclude_none: bool = False):
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def __repr__(self):
        return f"{self.__class__.__name__}(by_alias={self.by_alias}, exclude_none={self.exclude_none})"

    def serialize(self, document: Any) -> str:
        return (
            _adapter(type(document))
            .dump_json(document, by_alias=self.by_alias, exclude_none=self.exclude_none)
            .decode("utf-8")
        )

    def deserialize(self, data: Union[str, bytes, Any], model: Type[T]) -> T:
        adapter = _adapter(model)
        if isinstance(data, (str, bytes, bytearray)):
            return adapter.validate_json(data)
        # some drivers hand back already decoded JSON
        return adapter.validate_python(data)
