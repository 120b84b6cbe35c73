"""
Modal widget for confirmations.
"""

from __future__ import annotations

from typing import Callable, Optional

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationModal(ModalScreen):
    """Modal screen for confirming destructive actions."""

    DEFAULT_CSS = """
    ConfirmationModal {
        align: center middle;
    }

    #confirmation-container {
        width: 60;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }

    #confirmation-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #confirmation-buttons {
        height: 3;
        margin-top: 1;
        align: right middle;
    }

    #confirmation-buttons > Button {
        margin-left: 2;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("enter", "confirm", "Confirm"),
    ]

    def __init__(
        self,
        title: str,
        message: str,
        on_yes: Callable[[], None],
        on_no: Optional[Callable[[], None]] = None,
        *,
        confirm_label: str = "Delete",
        id: str | None = None,
        name: str | None = None,
        classes: str | None = None,
    ):
        """
        Initialize the confirmation modal.

        Args:
            title: Title of the confirmation dialog
            message: Message to display
            on_yes: Callback function when the action is confirmed
            on_no: Optional callback function when cancelled
            confirm_label: Text of the confirming button
        """
        super().__init__(id=id, name=name, classes=classes)
        self.title_text = title
        self.message = message
        self.on_yes = on_yes
        self.on_no = on_no
        self.confirm_label = confirm_label

    def compose(self) -> ComposeResult:
        """Compose the modal content."""
        with Container(id="confirmation-container"):
            yield Label(self.title_text, id="confirmation-title")
            yield Label(self.message, id="confirmation-message")

            with Horizontal(id="confirmation-buttons"):
                yield Button("Cancel", variant="primary", id="no-button")
                yield Button(self.confirm_label, variant="error", id="yes-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press events."""
        event.stop()
        if event.button.id == "no-button":
            self.action_cancel()
        elif event.button.id == "yes-button":
            self.action_confirm()

    def action_confirm(self) -> None:
        self.dismiss()
        self.on_yes()

    def action_cancel(self) -> None:
        self.dismiss()
        if self.on_no:
            self.on_no()
