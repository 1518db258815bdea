"""
Utilities module - Common utility functions.
"""

from semantic_locator.utils.logging import setup_logging, get_logger

__all__ = [
    "setup_logging",
    "get_logger",
]
