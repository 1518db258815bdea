"""
Locator-related exceptions.

These are programmer errors: a malformed locator or an impossible
composition. They are raised synchronously while classifying or compiling
and are never retried.
"""

from typing import Any, Optional

from semantic_locator.exceptions.base import LocatorEngineError


class LocatorError(LocatorEngineError):
    """Base exception for locator classification and compilation errors."""
    pass


class InvalidLocatorError(LocatorError):
    """
    Locator value cannot be parsed.

    Raised when a CSS selector is syntactically invalid or uses a
    pseudo-class that cannot be expressed in XPath.
    """

    def __init__(self, message: str, locator: Any = None):
        super().__init__(message, {"locator": locator})
        self.locator = locator


class InvalidCompositionError(LocatorError):
    """
    DSL operations cannot be combined.

    Raised when a parenthesized, already positioned XPath would have to be
    nested inside another expression, e.g. ``Locator.build("td").first()``
    passed to ``with_child`` or ``first().with_text(...)``.
    """

    def __init__(self, message: str, operation: str, xpath: Optional[str] = None):
        super().__init__(message, {"operation": operation, "xpath": xpath})
        self.operation = operation
        self.xpath = xpath


class UnconvertibleLocatorError(LocatorError):
    """
    Locator cannot be converted to XPath.

    Only CSS and XPath locators (and id/name, via their CSS form) can be
    compiled to XPath. Shadow, engine-native and custom locators need a
    backend-specific traversal.
    """

    def __init__(self, message: str, locator_type: Optional[str] = None):
        super().__init__(message, {"type": locator_type})
        self.locator_type = locator_type


class NullLocatorError(LocatorError):
    """Null locator was compiled. A null locator matches nothing."""
    pass


class InvalidPositionError(LocatorError):
    """
    Invalid element position.

    XPath positions are 1-indexed, so ``at(0)`` is always an error.
    """

    def __init__(self, message: str, position: int):
        super().__init__(message, {"position": position})
        self.position = position
