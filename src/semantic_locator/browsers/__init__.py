"""
Browsers module - Search adapters for resolution chains.
"""

from semantic_locator.browsers.document_search import DocumentSearch
from semantic_locator.browsers.playwright_search import (
    PlaywrightSearch,
    build_locator_string,
)

__all__ = [
    "DocumentSearch",
    "PlaywrightSearch",
    "build_locator_string",
]
