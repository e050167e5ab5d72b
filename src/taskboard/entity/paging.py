from dataclasses import dataclass, field
from math import ceil
from typing import Any, Callable, Generic, List, TypeVar

T = TypeVar("T")


@dataclass
class PagingResult(Generic[T]):
    """
    One page of rows plus the size of the full matching set.

    ``total_row`` comes from the paging procedure and does not depend on
    how many items this page holds.
    """

    items: List[T] = field(default_factory=list)
    page_index: int = 1
    page_size: int = 10
    keywords: str = ""
    total_row: int = 0

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return ceil(self.total_row / self.page_size)

    def to_dict(self, serialize: Callable[[T], Any] = lambda item: item) -> dict:
        return {
            "items": [serialize(item) for item in self.items],
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "keywords": self.keywords,
            "totalRow": self.total_row,
            "totalPages": self.total_pages,
        }
