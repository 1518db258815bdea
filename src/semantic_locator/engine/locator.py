"""
Locator - Immutable locator value and composable query builder.

A Locator describes how to find page elements: a CSS selector, an XPath
expression, a strict ``{type: value}`` strategy or a fuzzy human-readable
text that is resolved later by the semantic strategies.

Every DSL method returns a brand-new XPath locator; the receiver is never
modified.

Example:
    >>> from semantic_locator import Locator
    >>> cell = Locator.build("#fieldset-buttons").find("tr").last().find("td").first()
    >>> cell.to_xpath()
    "((.//*[@id = 'fieldset-buttons']//tr)[position()=last()-0]//td)[position()=1]"
"""

from dataclasses import dataclass, replace
from enum import Enum
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from semantic_locator.engine import xpath as xpath_utils
from semantic_locator.exceptions.locator import (
    InvalidCompositionError,
    InvalidLocatorError,
    InvalidPositionError,
    NullLocatorError,
    UnconvertibleLocatorError,
)


class LocatorType(str, Enum):
    """Built-in locator strategies."""
    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    FUZZY = "fuzzy"         # Human text, resolved by semantic strategies
    FRAME = "frame"
    SHADOW = "shadow"       # Path of selectors through shadow roots
    NATIVE = "native"       # Engine-native syntax (_react=, _vue=, internal:)
    BY = "by"               # Backend strategy string, passed through unchanged

    @classmethod
    def normalize(cls, value: Any) -> Union["LocatorType", str, None]:
        """Map a raw type name to a LocatorType, keeping unknown names as custom types."""
        if value is None or isinstance(value, LocatorType):
            return value
        try:
            return cls(value)
        except ValueError:
            return str(value)


# Anything passed where a locator is expected
RawLocator = Union[str, Mapping[str, Any], "Locator", None]


def shadow_path(value: Any) -> tuple:
    """
    Normalize a shadow payload to a tuple of host selectors.

    A single selector string is one segment, not a sequence of characters.

    Raises:
        InvalidLocatorError: If the payload isn't a string or a sequence of strings
    """
    if isinstance(value, str):
        segments = (value,)
    elif isinstance(value, (list, tuple)) and all(isinstance(segment, str) for segment in value):
        segments = tuple(value)
    else:
        raise InvalidLocatorError(
            f"Shadow locator must be a selector or a list of selectors, got {value!r}",
            locator={"shadow": value},
        )
    if not segments or not all(segments):
        raise InvalidLocatorError("Shadow locator segments can't be empty", locator={"shadow": value})
    return segments


# Trailing predicate added by at(); everything before it is wrapped in brackets
_POSITIONED = re.compile(r"\)\[position\(\)=(?:\d+|last\(\)-\d+)\]$")


@dataclass(frozen=True)
class Locator:
    """
    A classified locator.

    Attributes:
        type: Locator strategy, a custom strategy name, or None for the null locator
        value: Selector payload (str, tuple of shadow segments, or native mapping)
        strict: True when built from an explicit ``{type: value}`` mapping
        label: Display text for diagnostics; never affects matching
    """
    type: Union[LocatorType, str, None] = None
    value: Any = None
    strict: bool = False
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "type", LocatorType.normalize(self.type))
        if self.type == LocatorType.SHADOW and not isinstance(self.value, tuple):
            object.__setattr__(self, "value", shadow_path(self.value))

    # ==================== Construction ====================

    @classmethod
    def build(cls, locator: RawLocator = None) -> "Locator":
        """
        Start a DSL chain.

        An empty locator means "no constraint" and becomes a wildcard;
        anything else is classified with CSS as the default type.
        """
        if not locator:
            return cls(type=LocatorType.XPATH, value=".//*", strict=True)
        return _classify(locator, LocatorType.CSS)

    @classmethod
    def null(cls) -> "Locator":
        """The null locator: matches nothing, can't be compiled."""
        return cls()

    @property
    def type_name(self) -> Optional[str]:
        """Plain strategy name, e.g. ``"css"`` or a custom ``"data-qa"``."""
        if isinstance(self.type, LocatorType):
            return self.type.value
        return self.type

    # ==================== Predicates ====================

    def is_null(self) -> bool:
        return self.type is None

    def is_css(self) -> bool:
        return self.type == LocatorType.CSS

    def is_xpath(self) -> bool:
        return self.type == LocatorType.XPATH

    def is_fuzzy(self) -> bool:
        return self.type == LocatorType.FUZZY

    def is_frame(self) -> bool:
        return self.type == LocatorType.FRAME

    def is_shadow(self) -> bool:
        return self.type == LocatorType.SHADOW

    def is_native(self) -> bool:
        return self.type == LocatorType.NATIVE

    def is_strict(self) -> bool:
        return self.strict

    def is_custom(self) -> bool:
        """True for strategies outside the built-in set, e.g. ``{"data-qa": "save"}``."""
        return self.type is not None and not isinstance(self.type, LocatorType)

    def is_basic(self) -> bool:
        """True for locators every backend can run as-is."""
        return self.is_css() or self.is_xpath()

    def is_accessibility_id(self) -> bool:
        """Mobile accessibility ids are fuzzy locators prefixed with ``~``."""
        return self.is_fuzzy() and isinstance(self.value, str) and self.value.startswith("~")

    # ==================== Compilation ====================

    def simplify(self) -> Union[str, Dict[str, Any], None]:
        """
        Compile to the executable form understood by CSS/XPath capable backends.

        Returns:
            Selector string, a structured payload for shadow and native
            locators, or None for the null locator
        """
        if self.is_null():
            return None
        if self.type == LocatorType.ID:
            return f"#{self.value}"
        if self.type == LocatorType.NAME:
            return f'[name="{self.value}"]'
        if self.is_shadow():
            return {"shadow": list(self.value)}
        if self.is_native() and isinstance(self.value, Mapping):
            return dict(self.value)
        return self.value

    def to_strict(self) -> Optional[Dict[str, Any]]:
        """Strict ``{type: value}`` form, or None for the null locator."""
        if self.is_null():
            return None
        return {self.type_name: list(self.value) if self.is_shadow() else self.value}

    def to_xpath(self, pseudo_suffix: str = "") -> str:
        """
        Convert to an XPath expression.

        Args:
            pseudo_suffix: CSS pseudo-class appended before converting CSS locators

        Raises:
            NullLocatorError: For the null locator
            UnconvertibleLocatorError: For shadow, native, frame, fuzzy and custom locators
        """
        if self.is_null():
            raise NullLocatorError("Null locator can't be converted to XPath")
        if self.is_xpath():
            return self.value
        if self.is_css() or self.type in (LocatorType.ID, LocatorType.NAME):
            return xpath_utils.css_to_xpath(self.simplify(), pseudo_suffix)
        raise UnconvertibleLocatorError(
            f"Locator {self} can't be converted to XPath",
            locator_type=self.type_name,
        )

    def __str__(self) -> str:
        if self.label:
            return self.label
        value = list(self.value) if self.is_shadow() else self.value
        return f"{{{self.type_name}: {value}}}"

    # ==================== DSL ====================

    def or_(self, locator: RawLocator) -> "Locator":
        """Match elements of either locator."""
        xpath = xpath_utils.combine([
            self.to_xpath(),
            _classify(locator, LocatorType.CSS).to_xpath(),
        ])
        return _xpath(xpath)

    def find(self, locator: RawLocator) -> "Locator":
        """Find descendants matching ``locator``."""
        return _xpath(f"{self.to_xpath()}//{_sub_selector(locator, 'find')}")

    def with_child(self, locator: RawLocator) -> "Locator":
        """Keep elements that have a direct child matching ``locator``."""
        return _xpath(f"{self._predicate_base('with_child')}[./child::{_sub_selector(locator, 'with_child')}]")

    def with_descendant(self, locator: RawLocator) -> "Locator":
        """Keep elements that contain a descendant matching ``locator``."""
        sub = _sub_selector(locator, "with_descendant")
        return _xpath(f"{self._predicate_base('with_descendant')}[./descendant::{sub}]")

    def at(self, position: int) -> "Locator":
        """
        Select the element at a 1-based position; negative positions count from the end.

        Raises:
            InvalidPositionError: If position is 0
        """
        if position == 0:
            raise InvalidPositionError(
                "0 is not valid element position. XPath expects first element to have index 1",
                position=position,
            )
        if position > 0:
            xpath_position = str(position)
        else:
            # -1 points to the last element
            xpath_position = f"last()-{abs(position + 1)}"
        return _xpath(f"({self._predicate_base('at')})[position()={xpath_position}]")

    def first(self) -> "Locator":
        return self.at(1)

    def last(self) -> "Locator":
        return self.at(-1)

    def with_text(self, text: str) -> "Locator":
        """Keep elements whose normalized text contains ``text``."""
        return self._with_predicate("with_text", f"contains(normalize-space(.), {xpath_utils.literal(text)})")

    def with_text_equals(self, text: str) -> "Locator":
        """Keep elements whose normalized text equals ``text``."""
        return self._with_predicate("with_text_equals", f"normalize-space(.) = {xpath_utils.literal(text)}")

    def with_attr(self, attributes: Mapping[str, str]) -> "Locator":
        """Keep elements having all the given attribute values."""
        operands = [f"@{name} = {xpath_utils.literal(value)}" for name, value in attributes.items()]
        return self._with_predicate("with_attr", " and ".join(operands))

    def with_attr_starts_with(self, attr: str, value: str) -> "Locator":
        return self._with_predicate(
            "with_attr_starts_with",
            f"starts-with(@{attr}, {xpath_utils.literal(value)})",
        )

    def with_attr_ends_with(self, attr: str, value: str) -> "Locator":
        # XPath 1.0 has no ends-with()
        value = xpath_utils.literal(value)
        return self._with_predicate(
            "with_attr_ends_with",
            f"substring(@{attr}, string-length(@{attr}) - string-length({value}) + 1) = {value}",
        )

    def with_attr_contains(self, attr: str, value: str) -> "Locator":
        return self._with_predicate(
            "with_attr_contains",
            f"contains(@{attr}, {xpath_utils.literal(value)})",
        )

    def with_class_attr(self, value: str) -> "Locator":
        """Keep elements whose class attribute contains ``value`` (substring match)."""
        return self.with_attr_contains("class", value)

    def inside(self, locator: RawLocator) -> "Locator":
        """Keep elements having an ancestor matching ``locator``."""
        return self._with_predicate("inside", f"ancestor::{_sub_selector(locator, 'inside')}")

    def after(self, locator: RawLocator) -> "Locator":
        """Keep elements placed after a sibling matching ``locator``."""
        return self._with_predicate("after", f"preceding-sibling::{_sub_selector(locator, 'after')}")

    def before(self, locator: RawLocator) -> "Locator":
        """Keep elements placed before a sibling matching ``locator``."""
        return self._with_predicate("before", f"following-sibling::{_sub_selector(locator, 'before')}")

    def as_(self, label: str) -> "Locator":
        """Attach a display label. Matching is unchanged."""
        return replace(self, label=label)

    # ==================== Internals ====================

    def _predicate_base(self, operation: str) -> str:
        xpath = self.to_xpath()
        if _POSITIONED.search(xpath):
            raise InvalidCompositionError(
                f"XPath with round brackets is not possible here! "
                f"'{operation}' can't be applied after at(), first() or last(); use find() first.",
                operation=operation,
                xpath=xpath,
            )
        return xpath

    def _with_predicate(self, operation: str, predicate: str) -> "Locator":
        return _xpath(f"{self._predicate_base(operation)}[{predicate}]")


def _xpath(value: str) -> Locator:
    return Locator(type=LocatorType.XPATH, value=value, strict=True)


def _classify(locator: RawLocator, default_type: LocatorType) -> Locator:
    # Deferred: the classifier builds Locator instances
    from semantic_locator.engine.classifier import classify
    return classify(locator, default_type=default_type)


def _sub_selector(locator: RawLocator, operation: str) -> str:
    """XPath of a nested locator, usable as a location step."""
    xpath = _classify(locator, LocatorType.CSS).to_xpath()
    if xpath.lstrip().startswith("("):
        raise InvalidCompositionError(
            f"XPath with round brackets is not possible here! "
            f"May be a nested locator with at() last() or first() causes this error in '{operation}'.",
            operation=operation,
            xpath=xpath,
        )
    return xpath_utils.strip_leading_axis(xpath)


def shadow_segments(locator: Locator) -> List[str]:
    """Selectors of a shadow locator, outermost host first."""
    if not locator.is_shadow():
        raise UnconvertibleLocatorError(f"Locator {locator} is not a shadow locator", locator.type_name)
    return list(locator.value)
