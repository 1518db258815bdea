"""
Semantic Locator - Classify, compile and resolve human-friendly element locators.

This package turns locator input written by test authors (CSS, XPath,
strict ``{type: value}`` mappings or plain visible text such as
``"Sign In"``) into queries a browser driver can run, and resolves fuzzy
text through ordered strategy chains.

Example:
    >>> from semantic_locator import Locator, SemanticResolver, DocumentSearch
    >>> Locator.build("#fieldset-buttons").find("tr").last().to_xpath()
    "(.//*[@id = 'fieldset-buttons']//tr)[position()=last()-0]"
    >>> resolver = SemanticResolver(DocumentSearch.from_html(page_html))
    >>> resolver.find_clickable("Sign In").strategy
    'narrow'
"""

__version__ = "0.1.0"

# Public API exports
from semantic_locator.engine.locator import Locator, LocatorType
from semantic_locator.engine.classifier import classify
from semantic_locator.engine.filters import FilterPipeline, custom_locator_filter
from semantic_locator.engine.resolver import Resolution, SemanticResolver, AsyncSemanticResolver
from semantic_locator.browsers.document_search import DocumentSearch
from semantic_locator.config import Settings, configure

__all__ = [
    "Locator",
    "LocatorType",
    "classify",
    "FilterPipeline",
    "custom_locator_filter",
    "Resolution",
    "SemanticResolver",
    "AsyncSemanticResolver",
    "DocumentSearch",
    "Settings",
    "configure",
    "__version__",
]
