"""
Type Classifier - Turn raw locator input into a Locator.

Accepted input:
- str: ``"#id"``, ``".class"``, ``"[attr]"`` (CSS), ``"//div"``, ``"./a"``,
  ``"(//a)[1]"`` (XPath), ``"_react=Button"`` (engine-native), anything else
  is fuzzy text (or ``default_type`` when given)
- mapping: ``{"css": "..."}``, ``{"id": "..."}``, ``{"shadow": [...]}``,
  ``{"react": "Comp", "props": {...}}`` -- explicit and therefore strict
- Locator: copied as is
- empty input: the null locator

Structural classification runs first, then the filter pipeline.
"""

from dataclasses import replace
import logging
import re
from typing import Any, Mapping, Optional, Union

from semantic_locator.engine.filters import FilterPipeline, LocatorDraft, get_default_pipeline
from semantic_locator.engine.locator import Locator, LocatorType, RawLocator, shadow_path
from semantic_locator.exceptions.locator import InvalidLocatorError

logger = logging.getLogger(__name__)

NATIVE_KEYS = ("react", "vue", "pw")
NATIVE_MARKERS = ("_react=", "_vue=")
NATIVE_PREFIXES = ("internal:",)

_LEADING_BRACKETS = re.compile(r"^\(+")


def is_css(locator: str) -> bool:
    """Check if a string is a CSS selector."""
    return locator[:1] in ("#", ".", "[")


def is_xpath(locator: str) -> bool:
    """Check if a string is an XPath expression (leading brackets are ignored)."""
    trimmed = _LEADING_BRACKETS.sub("", locator)[:2]
    return trimmed in ("//", "./")


def is_native(locator: str) -> bool:
    """Check if a string uses engine-native selector syntax."""
    return any(marker in locator for marker in NATIVE_MARKERS) or locator.startswith(NATIVE_PREFIXES)


def is_shadow(locator: Any) -> bool:
    """Check if input is a shadow path, e.g. ``{"shadow": ["my-app", "button"]}``."""
    return isinstance(locator, Mapping) and len(locator) == 1 and "shadow" in locator


def classify(
    locator: RawLocator,
    default_type: Union[LocatorType, str, None] = None,
    pipeline: Optional[FilterPipeline] = None,
) -> Locator:
    """
    Classify raw input into a Locator.

    Args:
        locator: Raw locator input
        default_type: Type for strings with no structural markers (fuzzy otherwise)
        pipeline: Filters to apply; defaults to the process default pipeline

    Returns:
        Classified, immutable Locator

    Raises:
        InvalidLocatorError: For unsupported input types or malformed mappings
    """
    if isinstance(locator, Locator):
        return replace(locator)
    if not locator:
        return Locator.null()

    if isinstance(locator, Mapping):
        draft = _classify_mapping(locator)
    elif isinstance(locator, str):
        draft = _classify_string(locator, default_type)
    else:
        raise InvalidLocatorError(
            f"Unsupported locator {locator!r}: expected a string, a mapping or a Locator",
            locator=locator,
        )

    if pipeline is None:
        pipeline = get_default_pipeline()
    pipeline.apply(locator, draft)

    return Locator(
        type=draft.type,
        value=draft.value,
        strict=draft.strict,
        label=draft.label,
    )


def _classify_string(locator: str, default_type: Union[LocatorType, str, None]) -> LocatorDraft:
    if is_css(locator):
        locator_type = LocatorType.CSS
    elif is_xpath(locator):
        locator_type = LocatorType.XPATH
    elif is_native(locator):
        locator_type = LocatorType.NATIVE
    else:
        locator_type = LocatorType.normalize(default_type) or LocatorType.FUZZY
    return LocatorDraft(type=locator_type, value=locator, strict=False, label=locator)


def _classify_mapping(locator: Mapping[str, Any]) -> LocatorDraft:
    if is_shadow(locator):
        return LocatorDraft(type=LocatorType.SHADOW, value=shadow_path(locator["shadow"]), strict=True)

    if any(key in locator for key in NATIVE_KEYS):
        return LocatorDraft(type=LocatorType.NATIVE, value=dict(locator), strict=True)

    if len(locator) != 1:
        raise InvalidLocatorError(
            f"Strict locator must have exactly one key, got {list(locator)}",
            locator=dict(locator),
        )

    locator_type, value = next(iter(locator.items()))
    return LocatorDraft(type=LocatorType.normalize(locator_type), value=value, strict=True)
