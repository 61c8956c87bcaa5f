"""
Pagination Domain Models

Page requests are clamped into range, never rejected: 1 <= page <= MAX_PAGE
and 1 <= per_page <= MAX_PER_PAGE.
"""
import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100
# Largest page whose OFFSET still fits a PostgreSQL BIGINT
MAX_PAGE = (2 ** 63 - 1) // MAX_PER_PAGE

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationParams:
    """Validated page request."""
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    def __post_init__(self):
        object.__setattr__(self, "page", min(MAX_PAGE, max(1, int(self.page))))
        object.__setattr__(self, "per_page", min(MAX_PER_PAGE, max(1, int(self.per_page))))

    @property
    def limit(self) -> int:
        return self.per_page

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass
class Page(Generic[T]):
    """One page of results plus totals."""
    items: List[T]
    total: int
    page: int
    per_page: int
    total_pages: int

    @classmethod
    def build(cls, items: List[T], total: int, params: PaginationParams) -> "Page[T]":
        total_pages = math.ceil(total / params.per_page) if total else 0
        return cls(
            items=items,
            total=total,
            page=params.page,
            per_page=params.per_page,
            total_pages=total_pages,
        )
