"""Minimal logging utilities for exprfmt.

Every logger lives under the ``exprfmt`` namespace, so an application can
silence or raise the renderers' error-sentinel warnings with one call:
``logging.getLogger("exprfmt").setLevel(logging.ERROR)``.

Example:
    >>> from exprfmt.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("No rendering rule for %r; emitting error sentinel", "weird")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "exprfmt." prefix.

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'exprfmt.mymodule'
    """
    if not (name == "exprfmt" or name.startswith("exprfmt.")):
        name = f"exprfmt.{name}"
    return logging.getLogger(name)
