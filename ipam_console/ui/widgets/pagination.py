"""
Pagination widget for navigating through list results
"""

from typing import Optional

from textual.containers import Container
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Button, Input, Label


class Pagination(Container):
    """
    Pagination widget with first, prev, next, last buttons and a jump-to-page input
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        content-align: center middle;
    }

    Pagination > Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination > #page-indicator {
        min-width: 15;
        height: 3;
        content-align: center middle;
    }

    Pagination > #jump-input {
        width: 10;
    }
    """

    current_page = reactive(1)
    total_pages = reactive(1)

    class PageChanged(Message):
        """A navigation button asked for another page"""
        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    class JumpRequested(Message):
        """The user typed a page number; the raw text is validated elsewhere"""
        def __init__(self, raw: str) -> None:
            super().__init__()
            self.raw = raw

    def __init__(
        self,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Initialize the Pagination widget

        Args:
            id: Optional widget ID
            classes: Optional CSS classes
        """
        super().__init__(id=id, classes=classes)

    def compose(self):
        """Create child widgets"""
        yield Button("« First", id="first-page", classes="page-button")
        yield Button("< Prev", id="prev-page", classes="page-button")
        yield Label("Page [b]1[/b] of [b]1[/b]", id="page-indicator", classes="page-indicator")
        yield Button("Next >", id="next-page", classes="page-button")
        yield Button("Last »", id="last-page", classes="page-button")
        yield Input(value="1", placeholder="Page", id="jump-input")
        yield Button("Go", id="jump-button", classes="page-button")

    def on_mount(self) -> None:
        self._refresh_controls()

    def update_pages(self, current: int, total: int, jump_text: Optional[str] = None) -> None:
        """
        Update pagination with new page information

        Args:
            current: Current page number
            total: Total pages (at least 1 for display)
            jump_text: Text to put back into the jump input
        """
        self.current_page = current
        self.total_pages = max(total, 1)
        self._refresh_controls()
        if jump_text is not None:
            self.set_jump_text(jump_text)

    def set_jump_text(self, text: str) -> None:
        if self.is_mounted:
            self.query_one("#jump-input", Input).value = text

    def focus_jump(self) -> None:
        self.query_one("#jump-input", Input).focus()

    def _refresh_controls(self) -> None:
        if not self.is_mounted:
            return
        current, total = self.current_page, self.total_pages
        self.query_one("#page-indicator", Label).update(f"Page [b]{current}[/b] of [b]{total}[/b]")

        # Disable buttons if at first/last page
        self.query_one("#first-page", Button).disabled = current <= 1
        self.query_one("#prev-page", Button).disabled = current <= 1
        self.query_one("#next-page", Button).disabled = current >= total
        self.query_one("#last-page", Button).disabled = current >= total

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        button_id = event.button.id
        event.stop()

        if button_id == "jump-button":
            self.post_message(self.JumpRequested(self.query_one("#jump-input", Input).value))
            return

        new_page = self.current_page
        if button_id == "first-page":
            new_page = 1
        elif button_id == "last-page":
            new_page = self.total_pages
        elif button_id == "prev-page" and self.current_page > 1:
            new_page = self.current_page - 1
        elif button_id == "next-page" and self.current_page < self.total_pages:
            new_page = self.current_page + 1

        if new_page != self.current_page:
            self.post_message(self.PageChanged(new_page))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter in the jump input"""
        if event.input.id == "jump-input":
            event.stop()
            self.post_message(self.JumpRequested(event.value))
