from __future__ import annotations
from typing import Any, Optional

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import Text, TypeDecorator

from core_utils import jsonx

class JSONB(TypeDecorator):
    """
    ``dict[str, str]`` column stored as JSON.

    Native ``jsonb`` on PostgreSQL, JSON text elsewhere. ``None`` is stored as
    SQL NULL; NULL loads back as an empty dict.
    """
    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Optional[dict[str, Any]], dialect) -> Any:
        if value is None:
            return None
        data = {str(k): str(v) for k, v in dict(value).items()}
        if dialect.name == "postgresql":
            return data
        return jsonx.dumps(data)

    def process_result_value(self, value: Any, dialect) -> dict[str, str]:
        if value is None:
            return {}
        if isinstance(value, (str, bytes, bytearray)):
            value = jsonx.loads(value)
        if not isinstance(value, dict):
            raise ValueError("failed to unmarshal JSONB value")
        return {str(k): str(v) for k, v in value.items()}

__all__ = ["JSONB"]
