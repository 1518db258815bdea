"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Semantic Locator,
providing clear error types for different failure scenarios.
"""

from semantic_locator.exceptions.base import (
    LocatorEngineError,
    ConfigurationError,
)
from semantic_locator.exceptions.locator import (
    LocatorError,
    InvalidLocatorError,
    InvalidCompositionError,
    UnconvertibleLocatorError,
    NullLocatorError,
    InvalidPositionError,
)
from semantic_locator.exceptions.search import (
    SearchError,
    ElementNotFoundError,
)

__all__ = [
    # Base exceptions
    "LocatorEngineError",
    "ConfigurationError",
    # Locator exceptions
    "LocatorError",
    "InvalidLocatorError",
    "InvalidCompositionError",
    "UnconvertibleLocatorError",
    "NullLocatorError",
    "InvalidPositionError",
    # Search exceptions
    "SearchError",
    "ElementNotFoundError",
]
