"""
Search bar widget for filtering list screens
"""

from typing import Optional

from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Input


class SearchBar(Container):
    """
    Search bar widget with input and button
    """

    DEFAULT_CSS = """
    SearchBar {
        layout: horizontal;
        height: 3;
    }

    SearchBar > #search-input {
        width: 1fr;
    }
    """

    class Submitted(Message):
        """Search submitted message"""
        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    def __init__(
        self,
        placeholder: str = "Search...",
        value: str = "",
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Initialize the SearchBar

        Args:
            placeholder: Hint shown in the empty input
            value: Initial search text
            id: Optional widget ID
            classes: Optional CSS classes
        """
        super().__init__(id=id, classes=classes)
        self._placeholder = placeholder
        self._query = value

    def compose(self):
        """Create child widgets"""
        yield Input(value=self._query, placeholder=self._placeholder, id="search-input")
        yield Button("Search", id="search-btn")

    @property
    def query(self) -> str:
        """Get the current search query"""
        return self._query

    def focus_input(self) -> None:
        """Focus the search input"""
        self.query_one("#search-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle search button press"""
        if event.button.id == "search-btn":
            event.stop()
            self._submit_search()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle input submission (Enter key)"""
        if event.input.id == "search-input":
            event.stop()
            self._submit_search()

    def _submit_search(self) -> None:
        """Submit the search query"""
        input_widget = self.query_one("#search-input", Input)
        self._query = input_widget.value.strip()
        self.post_message(self.Submitted(self._query))
