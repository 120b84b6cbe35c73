"""Paginated admin console for IP address management data."""

__version__ = "0.1.0"
