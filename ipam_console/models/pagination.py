"""Generic page-of-results container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def count_pages(total_count: int, page_size: int) -> int:
    """ceil(total / size); 0 when there is nothing to show."""
    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


@dataclass(frozen=True, slots=True)
class PaginatedResult(Generic[T]):
    """A single page of records plus meta-data."""

    data: Tuple[T, ...]
    total_count: int     # records in the whole result set
    current_page: int    # 1-based page this result was produced for
    total_pages: int     # 0 when total_count is 0
    page_size: int

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.total_count < 0 or self.total_pages < 0:
            raise ValueError("counts cannot be negative")
        if self.current_page < 1:
            raise ValueError(f"current_page must be positive, got {self.current_page}")
        if len(self.data) > self.page_size:
            raise ValueError(f"{len(self.data)} records do not fit a page of {self.page_size}")
        # always store an immutable sequence
        object.__setattr__(self, "data", tuple(self.data))

    # ------------- constructors -------------
    @classmethod
    def build(cls, data: Sequence[T], total_count: int, page: int, page_size: int) -> "PaginatedResult[T]":
        """Derive total_pages from the counts."""
        return cls(
            data=tuple(data),
            total_count=total_count,
            current_page=page,
            total_pages=count_pages(total_count, page_size),
            page_size=page_size,
        )

    @classmethod
    def empty(cls, page_size: int) -> "PaginatedResult[T]":
        """The "no data" result used before a load and after failures."""
        return cls(data=(), total_count=0, current_page=1, total_pages=0, page_size=page_size)

    @classmethod
    def from_dict(
        cls,
        payload: Dict[str, Any],
        item_factory: Optional[Callable[[Any], T]] = None,
    ) -> "PaginatedResult[T]":
        """Accept the camelCase payload shape used by remote list endpoints."""
        items = payload.get("data") or []
        if item_factory is not None:
            items = [item_factory(item) for item in items]
        return cls(
            data=tuple(items),
            total_count=int(payload.get("totalCount", 0)),
            current_page=int(payload.get("currentPage", 1)),
            total_pages=int(payload.get("totalPages", 0)),
            page_size=int(payload.get("pageSize", max(len(items), 1))),
        )

    # ------------- helpers -------------
    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self.data)

    def is_empty(self) -> bool:
        return not self.data

    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def has_prev(self) -> bool:
        return self.current_page > 1

    def is_stranded(self) -> bool:
        """An empty page past the end, left behind by a deletion."""
        return (
            len(self.data) == 0
            and self.current_page > 1
            and self.current_page > self.total_pages
        )
