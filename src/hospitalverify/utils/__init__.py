"""Utility functions and helpers."""

from .formatting import format_currency
from .log import init_logging
from .sanitization import sanitize_query

__all__ = ["format_currency", "init_logging", "sanitize_query"]
