"""Minimal logging utilities for sqlign.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from sqlign.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering statement")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "sqlign." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'sqlign.mymodule'
    """
    if not (name == "sqlign" or name.startswith("sqlign.")):
        name = f"sqlign.{name}"
    return logging.getLogger(name)
