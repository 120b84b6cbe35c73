# ipam_console/ui/controllers/status_bar.py
"""Formats and updates the status bar."""

from __future__ import annotations

from typing import Dict

from textual.widgets import Static


class StatusBarController:
    """Builds the human-readable status text and writes it to the bar."""

    def __init__(self, status_bar: Static) -> None:
        self._bar = status_bar
        self.text = ""

    def update(self, meta: Dict[str, int | str | bool]) -> None:
        """
        Refresh the whole status line.

        `meta` expected keys:
            total, pages, current_page, selected, search_query, loading, user
        """
        if meta.get("denied"):
            text = "Access denied"
        else:
            parts: list[str] = [
                f"Total: {meta.get('total', 0)}",
                f"Page: {meta.get('current_page', 1)}/{max(int(meta.get('pages', 1) or 0), 1)}",
                f"Selected: {meta.get('selected', 0)}",
            ]
            if meta.get("search_query"):
                parts.append(f"Search: '{meta['search_query']}'")
            if meta.get("loading"):
                parts.append("Loading...")
            text = " | ".join(parts)

        if meta.get("user"):
            text = f"{text} | User: {meta['user']}"

        self.text = text
        self._bar.update(text)
