"""
Interfaces module - Abstract base classes for pluggable collaborators.

This module defines the contracts that search adapters must implement
to run queries produced by the engine.
"""

from semantic_locator.interfaces.search import (
    ISearchContext,
    IAsyncSearchContext,
)

__all__ = [
    "ISearchContext",
    "IAsyncSearchContext",
]
