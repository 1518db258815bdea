"""
Semantic Resolver - Resolve locators through ordered strategy chains.

Resolution flow:
1. Classify the raw locator (filter pipeline included)
2. Strict, CSS, XPath and other structured locators -> one DIRECT search
3. Fuzzy locators -> escape the text as an XPath literal and try each
   strategy of the chain in order; the first one with at least one match
   wins and later strategies are never generated
4. Nothing matched -> an empty Resolution (not an exception)

The resolver is stateless; the search adapter does the actual matching.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

from semantic_locator.engine.classifier import classify
from semantic_locator.engine.filters import FilterPipeline
from semantic_locator.engine.locator import Locator, LocatorType, RawLocator
from semantic_locator.engine.strategies import (
    CHAINS,
    CHECKABLE_CHAIN,
    CLICKABLE_CHAIN,
    FIELD_CHAIN,
    OPTION_CHAIN,
    ResolutionChain,
)
from semantic_locator.engine.xpath import literal
from semantic_locator.exceptions.locator import InvalidLocatorError, NullLocatorError
from semantic_locator.exceptions.search import ElementNotFoundError, SearchError
from semantic_locator.interfaces.search import IAsyncSearchContext, ISearchContext

logger = logging.getLogger(__name__)

DIRECT = "direct"
RAW = "raw"
NOT_FOUND = "not_found"


@dataclass
class Resolution:
    """
    Result of resolving a locator.

    Attributes:
        locator: The classified locator that was resolved
        chain: Chain name, or None for a direct search
        strategy: Winning strategy name, ``direct``, ``raw`` or ``not_found``
        elements: Matched element handles (empty when not found)
        query: The query that produced the match
        attempts: Strategy names tried, in order
    """
    locator: Locator
    chain: Optional[str] = None
    strategy: str = NOT_FOUND
    elements: List[Any] = field(default_factory=list)
    query: Optional[Locator] = None
    attempts: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.elements)

    @property
    def first(self) -> Optional[Any]:
        return self.elements[0] if self.elements else None

    def raise_if_empty(self, description: Optional[str] = None) -> "Resolution":
        """
        Turn an empty resolution into an error.

        Args:
            description: What was searched for, e.g. "Clickable element"

        Raises:
            ElementNotFoundError: If nothing matched
        """
        if self.found:
            return self
        description = description or (f"{self.chain.capitalize()} element" if self.chain else "Element")
        raise ElementNotFoundError(
            f'{description} "{self.locator}" was not found by text|CSS|XPath',
            locator=self.locator,
            description=description,
        )


# (strategy name, query, errors mean "no match")
PlannedQuery = Tuple[str, Locator, bool]


def _as_locator(locator: RawLocator, pipeline: Optional[FilterPipeline]) -> Locator:
    located = classify(locator, pipeline=pipeline)
    if located.is_null():
        raise NullLocatorError("Can't resolve an empty locator")
    return located


def _plan(locator: Locator, chain: Optional[ResolutionChain], scoped: bool) -> Iterator[PlannedQuery]:
    """Queries to try, generated lazily so a match stops generation."""
    if chain is None or not locator.is_fuzzy():
        yield DIRECT, locator, False
        return

    escaped = literal(locator.value)
    for step in chain.steps:
        if step.scoped_only and not scoped:
            continue
        yield step.name, Locator(type=LocatorType.XPATH, value=step.generator(escaped), strict=True), False

    if chain.raw_fallback:
        # Fuzzy text is rarely valid CSS
        yield RAW, Locator(type=LocatorType.CSS, value=locator.value, label=locator.label), True


def _is_scope_locator(scope: Any) -> bool:
    return isinstance(scope, (str, Locator, Mapping))


def _chain(chain: Union[ResolutionChain, str, None]) -> Optional[ResolutionChain]:
    if isinstance(chain, str):
        return CHAINS[chain]
    return chain


class SemanticResolver:
    """
    Resolve locators against a synchronous search adapter.

    Example:
        >>> resolver = SemanticResolver(DocumentSearch.from_html(html))
        >>> resolution = resolver.find_clickable("Sign In")
        >>> resolution.strategy
        'narrow'
    """

    def __init__(self, search: ISearchContext, pipeline: Optional[FilterPipeline] = None):
        """
        Initialize the resolver.

        Args:
            search: Adapter executing queries
            pipeline: Filters for classification; the process default when None
        """
        self.search = search
        self.pipeline = pipeline

    def resolve(
        self,
        locator: RawLocator,
        chain: Union[ResolutionChain, str, None] = None,
        scope: Optional[Any] = None,
    ) -> Resolution:
        """
        Resolve a locator.

        Args:
            locator: Raw or classified locator
            chain: Strategy chain for fuzzy locators; None searches directly
            scope: Element handle or locator to search within

        Returns:
            Resolution; ``found`` is False when every strategy came back empty
        """
        chain = _chain(chain)
        located = _as_locator(locator, self.pipeline)
        scope_element = self._scope(scope)
        resolution = Resolution(locator=located, chain=chain.name if chain else None)

        for name, query, tolerant in _plan(located, chain, scope_element is not None):
            resolution.attempts.append(name)
            logger.debug(f"Trying {name} strategy for {located}: {query.value}")
            try:
                elements = self.search.search(query, scope_element)
            except (SearchError, InvalidLocatorError) as e:
                if not tolerant:
                    raise
                logger.debug(f"Strategy {name} failed for {located}: {e}")
                elements = []
            if elements:
                resolution.strategy = name
                resolution.elements = list(elements)
                resolution.query = query
                logger.debug(f"Resolved {located} via {name} ({len(elements)} matches)")
                return resolution

        logger.info(f"Nothing matched {located} (tried: {', '.join(resolution.attempts)})")
        return resolution

    def find_clickable(self, locator: RawLocator, scope: Optional[Any] = None) -> Resolution:
        return self.resolve(locator, CLICKABLE_CHAIN, scope)

    def find_checkable(self, locator: RawLocator, scope: Optional[Any] = None) -> Resolution:
        return self.resolve(locator, CHECKABLE_CHAIN, scope)

    def find_field(self, locator: RawLocator, scope: Optional[Any] = None) -> Resolution:
        return self.resolve(locator, FIELD_CHAIN, scope)

    def find_option(self, option: str, select: Any) -> Resolution:
        """Find an option of a ``<select>`` by visible text, then by value."""
        return self.resolve({"fuzzy": option}, OPTION_CHAIN, select)

    def _scope(self, scope: Optional[Any]) -> Optional[Any]:
        if scope is None or not _is_scope_locator(scope):
            return scope
        context = classify(scope, default_type=LocatorType.CSS, pipeline=self.pipeline)
        elements = self.search.search(context, None)
        if not elements:
            raise ElementNotFoundError(f'Context element "{context}" was not found', locator=context)
        return elements[0]


class AsyncSemanticResolver:
    """Resolve locators against an async search adapter (e.g. Playwright)."""

    def __init__(self, search: IAsyncSearchContext, pipeline: Optional[FilterPipeline] = None):
        self.search = search
        self.pipeline = pipeline

    async def resolve(
        self,
        locator: RawLocator,
        chain: Union[ResolutionChain, str, None] = None,
        scope: Optional[Any] = None,
    ) -> Resolution:
        """Resolve a locator. See ``SemanticResolver.resolve``."""
        chain = _chain(chain)
        located = _as_locator(locator, self.pipeline)
        scope_element = await self._scope(scope)
        resolution = Resolution(locator=located, chain=chain.name if chain else None)

        for name, query, tolerant in _plan(located, chain, scope_element is not None):
            resolution.attempts.append(name)
            logger.debug(f"Trying {name} strategy for {located}: {query.value}")
            try:
                elements = await self.search.search(query, scope_element)
            except (SearchError, InvalidLocatorError) as e:
                if not tolerant:
                    raise
                logger.debug(f"Strategy {name} failed for {located}: {e}")
                elements = []
            if elements:
                resolution.strategy = name
                resolution.elements = list(elements)
                resolution.query = query
                logger.debug(f"Resolved {located} via {name} ({len(elements)} matches)")
                return resolution

        logger.info(f"Nothing matched {located} (tried: {', '.join(resolution.attempts)})")
        return resolution

    async def find_clickable(self, locator: RawLocator, scope: Optional[Any] = None) -> Resolution:
        return await self.resolve(locator, CLICKABLE_CHAIN, scope)

    async def find_checkable(self, locator: RawLocator, scope: Optional[Any] = None) -> Resolution:
        return await self.resolve(locator, CHECKABLE_CHAIN, scope)

    async def find_field(self, locator: RawLocator, scope: Optional[Any] = None) -> Resolution:
        return await self.resolve(locator, FIELD_CHAIN, scope)

    async def find_option(self, option: str, select: Any) -> Resolution:
        return await self.resolve({"fuzzy": option}, OPTION_CHAIN, select)

    async def _scope(self, scope: Optional[Any]) -> Optional[Any]:
        if scope is None or not _is_scope_locator(scope):
            return scope
        context = classify(scope, default_type=LocatorType.CSS, pipeline=self.pipeline)
        elements = await self.search.search(context, None)
        if not elements:
            raise ElementNotFoundError(f'Context element "{context}" was not found', locator=context)
        return elements[0]
