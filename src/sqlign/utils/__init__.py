"""Utility modules for sqlign.

Provides:
- logger: get_logger for logging
"""

from sqlign.utils.logger import get_logger

__all__ = [
    "get_logger",
]
