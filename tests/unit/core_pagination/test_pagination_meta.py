import pytest

from core_pagination import PaginationMeta, paginate


def test_middle_page():
    page = paginate(["c", "d"], total_items=5, current_page=2, items_per_page=2)
    m = page.meta
    assert m.total_pages == 3
    assert m.has_previous_page and m.has_next_page
    assert not m.is_first_page and not m.is_last_page
    assert page.data == ["c", "d"]


def test_first_and_last():
    m = PaginationMeta.build(total_items=2, current_page=1, items_per_page=10)
    assert m.total_pages == 1
    assert m.is_first_page and m.is_last_page
    assert not m.has_next_page and not m.has_previous_page


def test_empty_collection_has_zero_pages():
    m = PaginationMeta.build(total_items=0, current_page=1, items_per_page=10)
    assert m.total_pages == 0
    assert not m.is_last_page


def test_items_per_page_must_be_positive():
    with pytest.raises(ValueError):
        paginate([], total_items=10, current_page=1, items_per_page=0)


def test_json_uses_camel_case():
    page = paginate([1], total_items=1, current_page=1, items_per_page=1)
    assert page.model_dump(mode="json", by_alias=True) == {
        "data": [1],
        "meta": {
            "totalItems": 1,
            "currentPage": 1,
            "itemsPerPage": 1,
            "totalPages": 1,
            "hasPreviousPage": False,
            "hasNextPage": False,
            "isFirstPage": True,
            "isLastPage": True,
        },
    }
