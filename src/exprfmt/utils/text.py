"""Text processing utilities for exprfmt."""

from __future__ import annotations

import html as html_module
import math


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in markup and attributes.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#x27;

    Examples:
        >>> escape_html("a < b && c")
        'a &lt; b &amp;&amp; c'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("'", "&#x27;")


def format_float(value: float) -> str:
    """Spell a float the way the source language prints it.

    Examples:
        >>> format_float(1.5)
        '1.5'
        >>> format_float(float("-inf"))
        '-Inf'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    return repr(value)
