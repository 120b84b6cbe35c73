"""
Cell formatting for the list screens
"""

from datetime import datetime
from typing import Any, Optional


def format_date(value: Any, format_str: str = "%Y-%m-%d %H:%M") -> str:
    """
    Render a timestamp for a table cell.

    Args:
        value: datetime, ISO-8601 string or None
        format_str: strftime pattern

    Returns:
        The formatted timestamp; unparseable strings are shown unchanged
    """
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    if isinstance(value, datetime):
        return value.strftime(format_str)
    return str(value)


def format_flag(value: Any) -> str:
    """Checkmark for truthy values, blank otherwise"""
    return "✓" if value else ""


def truncate_text(text: Optional[str], max_length: int = 50, ellipsis: str = "…") -> str:
    """
    Squash a free-text column onto one line and cut it to max_length.
    """
    if not text:
        return ""
    # multi-line descriptions would break the row height
    flat = " ".join(text.split())
    if len(flat) <= max_length:
        return flat
    return flat[:max(max_length - len(ellipsis), 0)] + ellipsis
