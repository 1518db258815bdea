"""
Engine module - Locator classification, compilation and semantic resolution.
"""

from semantic_locator.engine.locator import Locator, LocatorType, RawLocator
from semantic_locator.engine.filters import (
    FilterPipeline,
    LocatorDraft,
    custom_locator_filter,
    pipeline_from_settings,
    get_default_pipeline,
    set_default_pipeline,
    reset_default_pipeline,
)
from semantic_locator.engine.classifier import classify, is_css, is_xpath, is_native, is_shadow
from semantic_locator.engine.xpath import literal, combine, css_to_xpath
from semantic_locator.engine.strategies import (
    Clickable,
    Checkable,
    Field,
    Select,
    ResolutionChain,
    ResolutionStep,
    CLICKABLE_CHAIN,
    CHECKABLE_CHAIN,
    FIELD_CHAIN,
    OPTION_CHAIN,
)
from semantic_locator.engine.resolver import (
    Resolution,
    SemanticResolver,
    AsyncSemanticResolver,
)

__all__ = [
    # Locator value
    "Locator",
    "LocatorType",
    "RawLocator",
    # Classification
    "classify",
    "is_css",
    "is_xpath",
    "is_native",
    "is_shadow",
    # Filters
    "FilterPipeline",
    "LocatorDraft",
    "custom_locator_filter",
    "pipeline_from_settings",
    "get_default_pipeline",
    "set_default_pipeline",
    "reset_default_pipeline",
    # XPath
    "literal",
    "combine",
    "css_to_xpath",
    # Strategies
    "Clickable",
    "Checkable",
    "Field",
    "Select",
    "ResolutionChain",
    "ResolutionStep",
    "CLICKABLE_CHAIN",
    "CHECKABLE_CHAIN",
    "FIELD_CHAIN",
    "OPTION_CHAIN",
    # Resolution
    "Resolution",
    "SemanticResolver",
    "AsyncSemanticResolver",
]
