import pytest
from pydantic import BaseModel, Field

from core_utils import jsonx


class Item(BaseModel):
    item_id: int = Field(alias="itemId")


def test_jsonx_roundtrip():
    obj = {"a": 1, "b": ["x", 2]}
    s = jsonx.dumps(obj)
    assert isinstance(s, str)
    assert jsonx.loads(s) == obj


def test_jsonx_sorted_keys_by_default():
    assert jsonx.dumps({"b": 1, "a": 2}) == '{"a":2,"b":1}'
    assert jsonx.dumps({"b": 1, "a": 2}, sort_keys=False) == '{"b":1,"a":2}'


def test_jsonx_models_and_sets():
    out = jsonx.loads(jsonx.dumps({"item": Item(itemId=3), "tags": {"x"}}))
    assert out == {"item": {"itemId": 3}, "tags": ["x"]}


def test_jsonx_loads_tolerates_bom_and_rejects_garbage():
    assert jsonx.loads(b"\xef\xbb\xbf[1]") == [1]
    with pytest.raises(ValueError):
        jsonx.loads("{nope")


def test_dumps_strict_refuses_unknown_types_but_keeps_models():
    class Opaque:
        pass

    with pytest.raises(TypeError):
        jsonx.dumps_strict({"o": Opaque()})
    assert jsonx.dumps_strict(Item(itemId=3)) == '{"itemId":3}'
