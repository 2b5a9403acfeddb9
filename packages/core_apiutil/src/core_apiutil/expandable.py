from __future__ import annotations
from typing import Any, Generic, Optional, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from core_utils import uid

T = TypeVar("T")

class Expandable(Generic[T]):
    """
    A related resource rendered either as its id or, once loaded, as the
    embedded object.

        class Invoice(BaseModel):
            id: str
            customer: Expandable[Customer]

        Invoice(id=..., customer=Expandable(cid))            # "customer": "cus_..."
        Invoice(id=..., customer=Expandable(cid, customer))  # "customer": {...}

    The id must be a valid :mod:`core_utils.uid`; anything else is a
    programming error and raises ``ValueError``.
    """
    __slots__ = ("_id", "_data")

    def __init__(self, id: str, data: Optional[T] = None):
        if not uid.is_valid(id):
            raise ValueError("invalid resource id")
        self._id = id
        self._data = data

    @property
    def id(self) -> str:
        return self._id

    @property
    def data(self) -> Optional[T]:
        return self._data

    @property
    def expanded(self) -> bool:
        return self._data is not None

    def to_jsonable(self) -> Any:
        return self._data if self.expanded else self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expandable):
            return NotImplemented
        return self._id == other._id and self._data == other._data

    def __repr__(self) -> str:
        return f"Expandable(id={self._id!r}, expanded={self.expanded})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        args = get_args(source)
        item_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()

        def _coerce(value: Any) -> "Expandable[Any]":
            if isinstance(value, Expandable):
                return value
            if isinstance(value, str):
                return cls(value)
            raise ValueError("expected a resource id or Expandable")

        def _serialize(value: "Expandable[Any]", info: core_schema.SerializationInfo) -> Any:
            return value.to_jsonable()

        return core_schema.no_info_plain_validator_function(
            _coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize,
                info_arg=True,
                return_schema=core_schema.union_schema([core_schema.str_schema(), item_schema]),
            ),
        )

__all__ = ["Expandable"]
