"""
Filter Pipeline - Ordered rewrite rules applied while classifying locators.

Filters implement project conventions such as custom attribute shorthands:

    I.click("$register_button")   ->   .//*[@data-test-id='register_button']

A pipeline is an immutable value. It is built once at configuration time and
passed to the classifier; registering a filter returns a new pipeline instead
of mutating shared state.

Example:
    >>> pipeline = FilterPipeline().with_filter(custom_locator_filter(prefix="$"))
    >>> classify("$save", pipeline=pipeline).value
    ".//*[@data-test-id='save']"
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Iterator, Optional, Tuple, TYPE_CHECKING

from semantic_locator.engine.locator import LocatorType
from semantic_locator.engine.xpath import literal
from semantic_locator.exceptions.base import ConfigurationError

if TYPE_CHECKING:
    from semantic_locator.config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class LocatorDraft:
    """
    Mutable locator under construction.

    Filters receive the raw input and the draft produced by structural
    classification, and may overwrite ``type``, ``value`` or ``label``.
    The draft is frozen into a ``Locator`` once every filter has run.
    """
    type: Any
    value: Any
    strict: bool = False
    label: Optional[str] = None


LocatorFilter = Callable[[Any, LocatorDraft], None]


@dataclass(frozen=True)
class FilterPipeline:
    """Immutable, ordered collection of locator filters."""
    filters: Tuple[LocatorFilter, ...] = ()

    def with_filter(self, locator_filter: LocatorFilter) -> "FilterPipeline":
        """Return a new pipeline with ``locator_filter`` appended."""
        return FilterPipeline(self.filters + (locator_filter,))

    def apply(self, raw: Any, draft: LocatorDraft) -> LocatorDraft:
        """Run every filter in registration order."""
        for locator_filter in self.filters:
            locator_filter(raw, draft)
        return draft

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[LocatorFilter]:
        return iter(self.filters)


EMPTY_PIPELINE = FilterPipeline()


def custom_locator_filter(
    prefix: str = "$",
    attribute: str = "data-test-id",
    strategy: str = "xpath",
    show_actual: bool = False,
) -> LocatorFilter:
    """
    Create a filter turning ``{prefix}value`` strings into attribute matches.

    Args:
        prefix: Prefix marking a custom locator (e.g. ``$`` or ``=``)
        attribute: Attribute to match (e.g. ``data-test-id``, ``data-qa``)
        strategy: Locator type to produce, ``xpath`` or ``css``
        show_actual: Display the generated locator instead of the shorthand

    Returns:
        Filter function for a FilterPipeline

    Raises:
        ConfigurationError: If prefix is empty or strategy is unknown
    """
    strategy = strategy.lower()
    if strategy not in ("xpath", "css"):
        raise ConfigurationError(
            f"Unknown custom locator strategy '{strategy}'",
            {"supported": ["xpath", "css"]},
        )
    if not prefix:
        raise ConfigurationError("Custom locator prefix can't be empty")

    def apply_custom_locator(raw: Any, draft: LocatorDraft) -> None:
        if not isinstance(raw, str) or not raw.startswith(prefix):
            return

        value = raw[len(prefix):]
        if strategy == "xpath":
            draft.type = LocatorType.XPATH
            draft.value = f".//*[@{attribute}={literal(value)}]"
        else:
            draft.type = LocatorType.CSS
            draft.value = f"[{attribute}={value}]"

        if show_actual:
            draft.label = draft.value

    return apply_custom_locator


def default_type_filter(default_type: str) -> LocatorFilter:
    """
    Create a filter classifying unmarked strings as ``default_type`` instead of fuzzy.

    Only strings the classifier left fuzzy are affected, so an explicit
    ``default_type`` passed by the caller still wins.
    """
    locator_type = LocatorType.normalize(default_type)

    def apply_default_type(raw: Any, draft: LocatorDraft) -> None:
        if isinstance(raw, str) and not draft.strict and draft.type == LocatorType.FUZZY:
            draft.type = locator_type

    return apply_default_type


def pipeline_from_settings(settings: "Settings") -> FilterPipeline:
    """Build the filter pipeline described by configuration."""
    pipeline = EMPTY_PIPELINE
    if settings.locator.default_type:
        pipeline = pipeline.with_filter(default_type_filter(settings.locator.default_type))

    custom = settings.custom_locator
    if custom.enabled:
        pipeline = pipeline.with_filter(custom_locator_filter(
            prefix=custom.prefix,
            attribute=custom.attribute,
            strategy=custom.strategy,
            show_actual=custom.show_actual,
        ))
        logger.debug(f"Custom locator enabled: '{custom.prefix}' -> @{custom.attribute} ({custom.strategy})")
    return pipeline


# Process default, installed once during setup
_default_pipeline: FilterPipeline = EMPTY_PIPELINE


def get_default_pipeline() -> FilterPipeline:
    """Pipeline used when the classifier isn't given one explicitly."""
    return _default_pipeline


def set_default_pipeline(pipeline: FilterPipeline) -> None:
    """
    Install the process default pipeline.

    Call during setup only, never while locators are being resolved.
    """
    global _default_pipeline
    _default_pipeline = pipeline


def reset_default_pipeline() -> None:
    """Restore the empty default pipeline (test isolation)."""
    set_default_pipeline(EMPTY_PIPELINE)
