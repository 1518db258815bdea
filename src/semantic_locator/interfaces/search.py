"""
Search Interface - Contract for element search collaborators.

The engine never touches the page. It hands compiled queries to a search
adapter supplied by the driver integration and only looks at how many
elements came back.

Example:
    >>> from semantic_locator.browsers import DocumentSearch
    >>> search = DocumentSearch.from_html("<button>Sign In</button>")
    >>> search.search(Locator.build("button"))
    [<Element button at 0x...>]
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from semantic_locator.engine.locator import Locator


class ISearchContext(ABC):
    """
    Synchronous element search.

    Implementations pick the query dialect themselves (XPath, CSS or an
    engine-native selector) from the Locator they receive.
    """

    @abstractmethod
    def search(self, query: "Locator", scope: Optional[Any] = None) -> List[Any]:
        """
        Find elements matching a query.

        Args:
            query: Compiled locator (css, xpath, shadow, native or custom)
            scope: Element handle to search within; None for the whole document

        Returns:
            Matching element handles, possibly empty

        Raises:
            SearchError: If the backend rejects the query
        """
        pass


class IAsyncSearchContext(ABC):
    """Asynchronous element search, for engines with an async API (Playwright)."""

    @abstractmethod
    async def search(self, query: "Locator", scope: Optional[Any] = None) -> List[Any]:
        """Find elements matching a query. See ``ISearchContext.search``."""
        pass
