"""Binding between the page number and the query string."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ipam_console.core.query_store import QueryStringStore
from ipam_console.errors import ValidationError
from ipam_console.models.pagination import PaginatedResult
from simple_logger import Slogger

Notifier = Callable[..., Any]


class PageNavigator:
    """
    Reads and writes the `page` parameter of a QueryStringStore.

    The navigator never fetches; writing the page notifies the store's
    listeners and the controller loads in response.
    """

    PAGE_PARAM = "page"

    def __init__(self, store: QueryStringStore, notify: Optional[Notifier] = None) -> None:
        self._store = store
        self._notify = notify
        # unknown until the first result settles
        self.total_pages: Optional[int] = None
        # text shown in the jump-to-page input
        self.input_text = str(self.current_page())

    @property
    def store(self) -> QueryStringStore:
        return self._store

    def current_page(self) -> int:
        raw = self._store.get(self.PAGE_PARAM)
        try:
            page = int(raw)
        except (TypeError, ValueError):
            return 1
        return page if page >= 1 else 1

    def clamp(self, page: int) -> int:
        upper = None if self.total_pages is None else max(self.total_pages, 1)
        page = max(page, 1)
        if upper is not None:
            page = min(page, upper)
        return page

    def go_to(self, page: int) -> int:
        """Navigate to `page` (clamped into range); returns the page written."""
        target = self.clamp(page)
        if target != page:
            Slogger.debug(
                f"PageNavigator.go_to: clamped page {page} to {target}",
                {"total_pages": self.total_pages},
            )
        self.input_text = str(target)
        self._store.update(**{self.PAGE_PARAM: target})
        return target

    def next_page(self) -> int:
        return self.go_to(self.current_page() + 1)

    def prev_page(self) -> int:
        return self.go_to(self.current_page() - 1)

    def first_page(self) -> int:
        return self.go_to(1)

    def last_page(self) -> int:
        return self.go_to(max(self.total_pages or 0, 1))

    def validate_page(self, raw: Any) -> int:
        """Parse user input into an in-range page number or raise ValidationError."""
        text = "" if raw is None else str(raw).strip()
        try:
            page = int(text)
        except ValueError:
            raise ValidationError(
                f"'{text}' is not a page number",
                field="page",
                value=raw,
                user_message="Please enter a whole page number.",
            ) from None

        upper = max(self.total_pages or 0, 1)
        if page < 1 or page > upper:
            raise ValidationError(
                f"page {page} outside 1..{upper}",
                field="page",
                value=raw,
                user_message=f"Page {page} is out of range. Enter a page between 1 and {upper}.",
            )
        return page

    def jump_to_page(self, raw: Any) -> bool:
        """
        Navigate to a typed page number. Invalid input restores the input text
        to the current page, reports the problem and leaves the page alone.
        """
        try:
            page = self.validate_page(raw)
        except ValidationError as e:
            self.input_text = str(self.current_page())
            Slogger.info(f"PageNavigator.jump_to_page: rejected {raw!r}", {"reason": str(e)})
            if self._notify is not None:
                self._notify(e.user_message, title="Invalid page", severity="warning")
            return False

        self.go_to(page)
        return True

    def sync(self, result: PaginatedResult) -> None:
        """Adopt the page count of a freshly settled result."""
        self.total_pages = result.total_pages
        self.input_text = str(self.current_page())
