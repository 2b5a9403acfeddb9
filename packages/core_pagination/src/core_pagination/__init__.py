from .pagination import PaginationMeta, Paginated, paginate

__all__ = ["PaginationMeta", "Paginated", "paginate"]
