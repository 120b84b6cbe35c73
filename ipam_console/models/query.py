"""The payload handed to every data-fetch action."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Mapping

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True, slots=True)
class Query:
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    filters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be positive, got {self.page}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        object.__setattr__(self, "filters", dict(self.filters))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    def with_page(self, page: int) -> "Query":
        return replace(self, page=page)

    def to_params(self) -> Dict[str, str]:
        """Flatten into query-string parameters."""
        params = {k: str(v) for k, v in self.filters.items()}
        params["page"] = str(self.page)
        return params
