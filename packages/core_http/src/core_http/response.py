from __future__ import annotations
from typing import Any

from fastapi.responses import JSONResponse

from core_utils.jsonx import to_jsonable

def write_json(status: int, data: Any) -> JSONResponse:
    """JSON response of *data* (pydantic models dumped by alias)."""
    return JSONResponse(status_code=int(status), content=to_jsonable(data))

def write_success(status: int) -> JSONResponse:
    return JSONResponse(status_code=int(status), content={"message": "success"})

__all__ = ["write_json", "write_success"]
