from __future__ import annotations
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

class PaginationMeta(BaseModel):
    """Page metadata; serialized with camelCase keys (``totalItems``, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_items: int
    current_page: int
    items_per_page: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    is_first_page: bool
    is_last_page: bool

    @classmethod
    def build(cls, total_items: int, current_page: int, items_per_page: int) -> "PaginationMeta":
        if items_per_page < 1:
            raise ValueError("items_per_page must be >= 1")
        total_pages = (total_items + items_per_page - 1) // items_per_page
        return cls(
            total_items=total_items,
            current_page=current_page,
            items_per_page=items_per_page,
            total_pages=total_pages,
            has_previous_page=current_page > 1,
            has_next_page=current_page < total_pages,
            is_first_page=current_page == 1,
            is_last_page=current_page == total_pages,
        )

class Paginated(BaseModel, Generic[T]):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: list[T]
    meta: PaginationMeta

def paginate(data: Sequence[T], total_items: int, current_page: int, items_per_page: int) -> Paginated[T]:
    """
    Wrap one page of *data* with its metadata.

    ``total_items`` counts the whole collection, not this page. An empty
    collection has zero pages, so ``is_last_page`` is False for it.
    """
    meta = PaginationMeta.build(total_items, current_page, items_per_page)
    return Paginated(data=list(data), meta=meta)

__all__ = ["PaginationMeta", "Paginated", "paginate"]
