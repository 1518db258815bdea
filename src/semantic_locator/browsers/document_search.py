"""
Document Search - ISearchContext over a static HTML document using lxml.

Useful for offline resolution (CLI, tests, saved page snapshots). CSS
queries are compiled to XPath by the engine, so both dialects behave the
same way they would in a browser.
"""

from pathlib import Path
from typing import Any, List, Optional, Union
import logging

from lxml import etree, html

from semantic_locator.engine.locator import Locator, LocatorType, shadow_segments
from semantic_locator.engine.xpath import css_to_xpath
from semantic_locator.exceptions.search import SearchError
from semantic_locator.interfaces.search import ISearchContext

logger = logging.getLogger(__name__)


class DocumentSearch(ISearchContext):
    """
    Search a parsed HTML document.

    Example:
        >>> search = DocumentSearch.from_html("<form><button>Sign In</button></form>")
        >>> len(search.search(Locator.build("button")))
        1
    """

    def __init__(self, root: Any):
        """
        Initialize the search.

        Args:
            root: lxml root element of the document
        """
        self.root = root

    @classmethod
    def from_html(cls, source: str) -> "DocumentSearch":
        """Parse HTML text (fragments are wrapped in a full document)."""
        return cls(html.document_fromstring(source))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "DocumentSearch":
        """Parse an HTML file."""
        return cls.from_html(Path(path).read_text(encoding="utf-8"))

    def to_xpath(self, query: Locator) -> str:
        """XPath used to run a query against the document."""
        if query.is_xpath():
            return query.value
        if query.is_shadow():
            # No shadow roots in a static document: treat hosts as ancestors
            return css_to_xpath(" ".join(shadow_segments(query)))
        if query.is_fuzzy():
            return css_to_xpath(query.value)
        if query.is_css() or query.type in (LocatorType.ID, LocatorType.NAME):
            return query.to_xpath()
        raise SearchError(
            f"Locator {query} is not supported for static documents",
            {"type": query.type_name},
        )

    def search(self, query: Locator, scope: Optional[Any] = None) -> List[Any]:
        """Find elements matching a query within ``scope`` (or the whole document)."""
        context = self.root if scope is None else scope
        expression = self.to_xpath(query)
        try:
            results = context.xpath(expression)
        except (etree.XPathError, ValueError) as e:
            # lxml rejects control characters in the expression with ValueError
            raise SearchError(
                f"Invalid XPath '{expression}': {e}",
                {"locator": str(query)},
            ) from e

        if not isinstance(results, list):
            return []
        elements = [item for item in results if isinstance(item, etree._Element)]
        logger.debug(f"{len(elements)} elements match {expression}")
        return elements
