"""
Playwright Search - IAsyncSearchContext implementation using Playwright.

Queries are turned into Playwright selector strings:

- xpath     -> ``xpath=...``
- css / id / name / fuzzy -> CSS text
- shadow    -> descendant CSS (Playwright CSS pierces open shadow roots)
- native    -> ``_react=Comp[prop = "value"]``, ``_vue=...`` or a raw ``pw`` selector
- custom    -> ``type=value`` (custom selector engines)
"""

from typing import Any, List, Mapping, Optional
import logging

from playwright.async_api import Error as PlaywrightError

from semantic_locator.engine.locator import Locator, shadow_segments
from semantic_locator.exceptions.locator import NullLocatorError, UnconvertibleLocatorError
from semantic_locator.exceptions.search import SearchError
from semantic_locator.interfaces.search import IAsyncSearchContext

logger = logging.getLogger(__name__)


def _props(props: Mapping[str, Any]) -> str:
    return "".join(f'[{key} = "{value}"]' for key, value in props.items())


def build_native_selector(value: Any) -> str:
    """Selector string for an engine-native locator."""
    if isinstance(value, str):
        return value
    if "react" in value:
        return f"_react={value['react']}{_props(value.get('props') or {})}"
    if "vue" in value:
        return f"_vue={value['vue']}{_props(value.get('props') or {})}"
    return str(value["pw"])


def build_locator_string(locator: Locator) -> str:
    """
    Convert a Locator to a Playwright selector string.

    Raises:
        NullLocatorError: For the null locator
        UnconvertibleLocatorError: For frame locators, which need frame switching
    """
    if locator.is_null():
        raise NullLocatorError("Null locator can't be used as a Playwright selector")
    if locator.is_custom():
        return f"{locator.type_name}={locator.value}"
    if locator.is_xpath():
        return f"xpath={locator.value}"
    if locator.is_shadow():
        return " ".join(shadow_segments(locator))
    if locator.is_native():
        return build_native_selector(locator.value)
    if locator.is_frame():
        raise UnconvertibleLocatorError(
            f"Frame locator {locator} must be entered with frame_locator(), not searched",
            locator_type=locator.type_name,
        )
    return locator.simplify()


class PlaywrightSearch(IAsyncSearchContext):
    """
    Search a Playwright page (or a Playwright Locator used as scope).

    Example:
        >>> search = PlaywrightSearch(page)
        >>> resolver = AsyncSemanticResolver(search)
        >>> resolution = await resolver.find_clickable("Sign In")
        >>> await resolution.first.click()
    """

    def __init__(self, page: Any):
        """
        Initialize the search.

        Args:
            page: Playwright Page or Frame
        """
        self._page = page

    async def search(self, query: Locator, scope: Optional[Any] = None) -> List[Any]:
        """Find elements matching a query; returns Playwright Locators."""
        matcher = self._page if scope is None else scope
        selector = build_locator_string(query)
        try:
            elements = await matcher.locator(selector).all()
        except PlaywrightError as e:
            raise SearchError(
                f"Playwright rejected selector '{selector}': {e}",
                {"locator": str(query)},
            ) from e
        logger.debug(f"{len(elements)} elements match {selector}")
        return elements
