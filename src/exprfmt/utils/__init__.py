"""Utility modules for exprfmt.

Provides:
- text: escape_html, format_float
- logger: get_logger for logging
"""

from exprfmt.utils.logger import get_logger
from exprfmt.utils.text import escape_html, format_float

__all__ = [
    "escape_html",
    "format_float",
    "get_logger",
]
