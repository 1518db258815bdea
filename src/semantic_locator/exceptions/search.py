"""
Search-related exceptions.
"""

from typing import Any, Optional

from semantic_locator.exceptions.base import LocatorEngineError


class SearchError(LocatorEngineError):
    """Base exception for errors reported by search adapters."""
    pass


class ElementNotFoundError(SearchError):
    """
    Element not found on the page.

    The engine itself never raises this for an exhausted resolution chain;
    it returns an empty resolution instead. Callers that need a failure
    convert it with ``Resolution.raise_if_empty()``.
    """

    def __init__(self, message: str, locator: Any, description: Optional[str] = None):
        super().__init__(message, {"locator": str(locator), "description": description})
        self.locator = locator
        self.description = description
