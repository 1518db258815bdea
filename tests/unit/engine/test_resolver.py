"""
Tests for semantic resolution through strategy chains.
"""

from typing import Any, List, Optional

import pytest

from semantic_locator.engine.filters import FilterPipeline, custom_locator_filter
from semantic_locator.engine.locator import Locator, LocatorType
from semantic_locator.engine.resolver import (
    DIRECT,
    NOT_FOUND,
    RAW,
    AsyncSemanticResolver,
    Resolution,
    SemanticResolver,
)
from semantic_locator.engine.strategies import CHAINS, CLICKABLE_CHAIN, OPTION_CHAIN
from semantic_locator.exceptions import ElementNotFoundError, NullLocatorError, SearchError
from semantic_locator.interfaces.search import IAsyncSearchContext, ISearchContext


class RecordingSearch(ISearchContext):
    """Search adapter wrapper remembering every query it ran."""

    def __init__(self, search: ISearchContext):
        self._search = search
        self.queries: List[Locator] = []

    def search(self, query: Locator, scope: Optional[Any] = None) -> List[Any]:
        self.queries.append(query)
        return self._search.search(query, scope)


class AsyncDocumentSearch(IAsyncSearchContext):
    """Async facade over a document search."""

    def __init__(self, search: ISearchContext):
        self._search = search

    async def search(self, query: Locator, scope: Optional[Any] = None) -> List[Any]:
        return self._search.search(query, scope)


@pytest.fixture
def resolver(login_search):
    """Resolver over the login page."""
    return SemanticResolver(login_search)


class TestClickable:
    """Test the clickable chain."""

    def test_button_text_in_scope(self, locator_search):
        """Test exact button text inside a scope resolves via narrow."""
        resolution = SemanticResolver(locator_search).find_clickable("Sign In", scope="#submit-wrapper")

        assert resolution.found
        assert resolution.strategy == "narrow"
        assert resolution.locator.is_fuzzy()
        assert resolution.first.get("id") == "submit"

    def test_input_button_value(self, resolver):
        """Test submit inputs match by value."""
        resolution = resolver.find_clickable("Log In")

        assert resolution.strategy == "narrow"
        assert resolution.first.get("type") == "submit"

    def test_first_match_short_circuits(self, login_search):
        """Test later strategies are never generated once one matches."""
        search = RecordingSearch(login_search)

        resolution = SemanticResolver(search).find_clickable("Save")

        assert resolution.attempts == ["narrow"]
        assert len(search.queries) == 1
        assert [element.text for element in resolution.elements] == ["Save"]

    def test_partial_link_text(self, resolver):
        """Test partial link text resolves via wide."""
        resolution = resolver.find_clickable("Forgot")

        assert resolution.strategy == "wide"
        assert resolution.attempts == ["narrow", "wide"]
        assert resolution.first.get("href") == "/forgot"

    def test_button_name(self, resolver):
        """Test buttons match by name attribute."""
        resolution = resolver.find_clickable("help-button")

        assert resolution.strategy == "wide"
        assert resolution.first.tag == "button"

    def test_title(self, resolver):
        """Test any element matches by title."""
        resolution = resolver.find_clickable("Close dialog")

        assert resolution.strategy == "wide"
        assert resolution.first.tag == "span"

    def test_scope_narrows_matches(self, resolver):
        """Test a scope locator limits the search."""
        everywhere = resolver.find_clickable("Delete")
        in_row = resolver.find_clickable("Delete", scope="#row-2")

        assert len(everywhere.elements) == 2
        assert len(in_row.elements) == 1
        assert in_row.first.getparent().getparent().get("id") == "row-2"

    def test_scope_element(self, resolver, login_search):
        """Test an element handle can be used as scope."""
        row = login_search.search(Locator.build("#row-2"))[0]

        resolution = resolver.find_clickable("Delete", scope=row)

        assert len(resolution.elements) == 1

    def test_self_strategy_needs_scope(self, resolver):
        """Test the scope element itself is matched only when a scope is given."""
        scoped = resolver.find_clickable("Archive", scope="#toolbar")
        unscoped = resolver.find_clickable("Archive")

        assert scoped.strategy == "self"
        assert scoped.first.get("id") == "toolbar"
        assert not unscoped.found
        assert unscoped.attempts == ["narrow", "wide", RAW]

    def test_raw_fallback(self, resolver):
        """Test fuzzy text is finally tried as a CSS selector."""
        resolution = resolver.find_clickable("textarea")

        assert resolution.strategy == RAW
        assert resolution.first.get("name") == "comment"

    def test_raw_fallback_with_invalid_css(self, resolver):
        """Test text that isn't valid CSS just doesn't match."""
        resolution = resolver.find_clickable("Does not exist!")

        assert not resolution.found
        assert resolution.strategy == NOT_FOUND
        assert resolution.attempts == ["narrow", "wide", RAW]
        assert resolution.query is None

    def test_text_with_quotes(self):
        """Test text with both quote kinds is escaped correctly."""
        from semantic_locator.browsers.document_search import DocumentSearch

        search = DocumentSearch.from_html("<div><button>Say \"it's\"</button></div>")

        resolution = SemanticResolver(search).find_clickable('Say "it\'s"')

        assert resolution.strategy == "narrow"


class TestCheckable:
    """Test the checkable chain."""

    def test_label_for(self, resolver):
        """Test a checkbox matches by its label."""
        resolution = resolver.find_checkable("Remember Me")

        assert resolution.strategy == "by_text"
        assert resolution.first.get("id") == "remember"

    def test_wrapping_label(self, resolver):
        """Test a radio button matches by its wrapping label."""
        resolution = resolver.find_checkable("Pro plan")

        assert resolution.strategy == "by_text"
        assert resolution.first.get("value") == "pro"

    def test_name(self, resolver):
        """Test a checkbox matches by name."""
        resolution = resolver.find_checkable("remember")

        assert resolution.strategy == "by_name"
        assert resolution.attempts == ["by_text", "by_name"]


class TestField:
    """Test the field chain."""

    def test_label_equals(self, resolver):
        """Test a field matches by exact label."""
        resolution = resolver.find_field("Email")

        assert resolution.strategy == "label_equals"
        assert [element.get("id") for element in resolution.elements] == ["email"]

    def test_placeholder(self, resolver):
        """Test a field matches by placeholder."""
        resolution = resolver.find_field("Your password")

        assert resolution.strategy == "label_equals"
        assert resolution.first.get("id") == "password"

    def test_partial_label(self, resolver):
        """Test a field matches by partial label text."""
        resolution = resolver.find_field("Pass")

        assert resolution.strategy == "label_contains"
        assert resolution.first.get("id") == "password"

    def test_aria_label(self, resolver):
        """Test a field matches by aria-label."""
        resolution = resolver.find_field("Comment")

        assert resolution.strategy == "label_contains"
        assert resolution.first.tag == "textarea"

    def test_hidden_input_by_name(self, resolver):
        """Test hidden inputs are only found by name."""
        resolution = resolver.find_field("token")

        assert resolution.strategy == "by_name"
        assert resolution.attempts == ["label_equals", "label_contains", "by_name"]


class TestOption:
    """Test the option chain."""

    def test_visible_text(self, resolver):
        """Test options match by visible text, inside optgroups too."""
        select = resolver.find_field("country").first

        resolution = resolver.find_option("Germany", select)

        assert resolution.strategy == "by_visible_text"
        assert resolution.first.get("value") == "de"

    def test_value(self, resolver):
        """Test options match by value."""
        resolution = resolver.find_option("us", "select")

        assert resolution.strategy == "by_value"
        assert resolution.first.text == "United States"

    def test_no_raw_fallback(self, resolver):
        """Test the option chain ends without a CSS fallback."""
        resolution = resolver.find_option("France", "select")

        assert not resolution.found
        assert resolution.attempts == ["by_visible_text", "by_value"]
        assert OPTION_CHAIN.strategy_names == ("by_visible_text", "by_value")


class TestDirectSearch:
    """Test locators that bypass the chains."""

    def test_css_locator(self, resolver):
        """Test structured locators are searched directly."""
        resolution = resolver.find_clickable("#email")

        assert resolution.strategy == DIRECT
        assert resolution.attempts == [DIRECT]
        assert resolution.chain == "clickable"

    def test_no_chain(self, resolver):
        """Test resolving without a chain searches directly."""
        resolution = resolver.resolve({"name": "password"})

        assert resolution.strategy == DIRECT
        assert resolution.chain is None
        assert resolution.query.type == LocatorType.NAME

    def test_chain_by_name(self, resolver):
        """Test chains can be given by name."""
        resolution = resolver.resolve("Remember Me", "checkable")

        assert resolution.chain == "checkable"
        assert resolution.strategy == "by_text"

    def test_invalid_xpath_is_an_error(self, resolver):
        """Test search errors on a direct query propagate."""
        with pytest.raises(SearchError):
            resolver.resolve("//div[")

    def test_custom_locator_pipeline(self):
        """Test the resolver classifies with its own pipeline."""
        from semantic_locator.browsers.document_search import DocumentSearch

        search = DocumentSearch.from_html('<div><button data-qa="save">Go</button></div>')
        pipeline = FilterPipeline().with_filter(custom_locator_filter(attribute="data-qa"))

        resolution = SemanticResolver(search, pipeline=pipeline).find_clickable("$save")

        assert resolution.strategy == DIRECT
        assert resolution.first.text == "Go"


class TestResolutionErrors:
    """Test empty and failed resolutions."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_locator(self, resolver, value):
        """Test an empty locator can't be resolved."""
        with pytest.raises(NullLocatorError):
            resolver.find_clickable(value)

    def test_missing_scope(self, resolver):
        """Test a scope locator that matches nothing is an error."""
        with pytest.raises(ElementNotFoundError):
            resolver.find_clickable("Delete", scope="#missing")

    def test_raise_if_empty(self, resolver):
        """Test an empty resolution can be turned into an error."""
        resolution = resolver.find_clickable("Nope")

        with pytest.raises(ElementNotFoundError) as exc_info:
            resolution.raise_if_empty()

        assert 'Clickable element "Nope" was not found by text|CSS|XPath' in str(exc_info.value)
        assert exc_info.value.description == "Clickable element"

    def test_raise_if_empty_when_found(self, resolver):
        """Test a found resolution is returned unchanged."""
        resolution = resolver.find_clickable("Log In")

        assert resolution.raise_if_empty() is resolution

    def test_empty_resolution(self):
        """Test default resolution values."""
        resolution = Resolution(locator=Locator(type="fuzzy", value="x"))

        assert resolution.found is False
        assert resolution.first is None
        assert resolution.strategy == NOT_FOUND


class TestChains:
    """Test chain definitions."""

    def test_chain_order(self):
        """Test strategies are reported in resolution order."""
        assert CLICKABLE_CHAIN.strategy_names == ("narrow", "wide", "self", "raw")
        assert CHAINS["checkable"].strategy_names == ("by_text", "by_name", "raw")
        assert CHAINS["field"].strategy_names == ("label_equals", "label_contains", "by_name", "raw")


class TestAsyncSemanticResolver:
    """Test the async resolver."""

    @pytest.mark.asyncio
    async def test_find_clickable(self, login_search):
        """Test async resolution follows the same chain."""
        resolver = AsyncSemanticResolver(AsyncDocumentSearch(login_search))

        resolution = await resolver.find_clickable("Forgot")

        assert resolution.strategy == "wide"
        assert resolution.attempts == ["narrow", "wide"]

    @pytest.mark.asyncio
    async def test_scope_and_option(self, login_search):
        """Test async scopes are resolved before the chain runs."""
        resolver = AsyncSemanticResolver(AsyncDocumentSearch(login_search))

        resolution = await resolver.find_option("Germany", "select")

        assert resolution.strategy == "by_visible_text"

    @pytest.mark.asyncio
    async def test_missing_scope(self, login_search):
        """Test a missing scope raises."""
        resolver = AsyncSemanticResolver(AsyncDocumentSearch(login_search))

        with pytest.raises(ElementNotFoundError):
            await resolver.find_field("Email", scope="#missing")

    @pytest.mark.asyncio
    async def test_not_found(self, login_search):
        """Test exhaustion returns an empty resolution."""
        resolver = AsyncSemanticResolver(AsyncDocumentSearch(login_search))

        resolution = await resolver.find_checkable("Subscribe")

        assert not resolution.found
        assert resolution.attempts == ["by_text", "by_name", "raw"]
