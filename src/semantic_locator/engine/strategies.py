"""
Semantic Strategies - XPath generators for fuzzy locators.

Each generator takes an already escaped XPath literal (see ``xpath.literal``)
and returns a relative XPath query. Generators are grouped into ordered
chains, one per element class:

CLICKABLE:  narrow -> wide -> self (scoped only) -> raw
CHECKABLE:  by_text -> by_name -> raw
FIELD:      label_equals -> label_contains -> by_name -> raw
OPTION:     by_visible_text -> by_value

"raw" means the fuzzy text is finally tried as a plain CSS selector.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from semantic_locator.engine.xpath import combine

QueryGenerator = Callable[[str], str]

# Reusable fragments
BUTTON_INPUT = "./@type = 'submit' or ./@type = 'image' or ./@type = 'button'"
FORM_CONTROL = "*[self::input | self::textarea | self::select]"
NOT_BUTTON_OR_HIDDEN = "not(./@type = 'submit' or ./@type = 'image' or ./@type = 'hidden')"
CHECKABLE_INPUT = "input[@type = 'checkbox' or @type = 'radio']"


def _labelled_by(literal: str) -> str:
    return f".//*[@aria-labelledby = //*[@id][normalize-space(string(.)) = {literal}]/@id ]"


class Clickable:
    """Links, buttons and button-like inputs."""

    @staticmethod
    def narrow(literal: str) -> str:
        """Exact text, image alt or button value."""
        return combine([
            f".//a[normalize-space(.)={literal}]",
            f".//button[normalize-space(.)={literal}]",
            f".//a/img[normalize-space(@alt)={literal}]/ancestor::a",
            f".//input[{BUTTON_INPUT}][normalize-space(@value)={literal}]",
        ])

    @staticmethod
    def wide(literal: str) -> str:
        """Partial text, name and accessible name matches."""
        return combine([
            f".//a[./@href][((contains(normalize-space(string(.)), {literal})) or .//img[contains(./@alt, {literal})])]",
            f".//input[{BUTTON_INPUT}][contains(./@value, {literal})]",
            f".//input[./@type = 'image'][contains(./@alt, {literal})]",
            f".//button[contains(normalize-space(string(.)), {literal})]",
            f".//label[contains(normalize-space(string(.)), {literal})]",
            f".//input[{BUTTON_INPUT}][./@name = {literal}]",
            f".//button[./@name = {literal}]",
            f".//*[@aria-label = {literal}]",
            f".//*[@title = {literal}]",
            _labelled_by(literal),
        ])

    @staticmethod
    def self_(literal: str) -> str:
        """The scope element itself, by text or value."""
        return (
            f"./self::*[contains(normalize-space(string(.)), {literal}) "
            f"or contains(normalize-space(@value), {literal})]"
        )


class Checkable:
    """Checkboxes and radio buttons."""

    @staticmethod
    def by_text(literal: str) -> str:
        return combine([
            f".//{CHECKABLE_INPUT}[(@id = //label[@for][contains(normalize-space(string(.)), {literal})]/@for) "
            f"or @placeholder = {literal}]",
            f".//label[contains(normalize-space(string(.)), {literal})]//input[@type = 'radio' or @type = 'checkbox']",
        ])

    @staticmethod
    def by_name(literal: str) -> str:
        return f".//{CHECKABLE_INPUT}[@name = {literal}]"


class Field:
    """Inputs, textareas and selects (buttons and hidden inputs excluded)."""

    @staticmethod
    def label_equals(literal: str) -> str:
        return combine([
            f".//{FORM_CONTROL}[{NOT_BUTTON_OR_HIDDEN}][((./@name = {literal}) "
            f"or ./@id = //label[@for][normalize-space(string(.)) = {literal}]/@for "
            f"or ./@placeholder = {literal})]",
            f".//label[normalize-space(string(.)) = {literal}]//.//{FORM_CONTROL}[{NOT_BUTTON_OR_HIDDEN}]",
        ])

    @staticmethod
    def label_contains(literal: str) -> str:
        return combine([
            Field.by_text(literal),
            f".//*[@aria-label = {literal}]",
            f".//*[@title = {literal}]",
            _labelled_by(literal),
        ])

    @staticmethod
    def by_name(literal: str) -> str:
        return f".//{FORM_CONTROL}[@name = {literal}]"

    @staticmethod
    def by_text(literal: str) -> str:
        """Partial label text, name or placeholder."""
        return combine([
            f".//{FORM_CONTROL}[{NOT_BUTTON_OR_HIDDEN}][(((./@name = {literal}) "
            f"or ./@id = //label[@for][contains(normalize-space(string(.)), {literal})]/@for) "
            f"or ./@placeholder = {literal})]",
            f".//label[contains(normalize-space(string(.)), {literal})]//.//{FORM_CONTROL}[{NOT_BUTTON_OR_HIDDEN}]",
        ])


class Select:
    """Options of a ``<select>``; queries run with the select element as scope."""

    @staticmethod
    def by_visible_text(literal: str) -> str:
        normalized = f"[normalize-space(.) = {literal}]"
        return f"./option{normalized}|./optgroup/option{normalized}"

    @staticmethod
    def by_value(literal: str) -> str:
        normalized = f"[normalize-space(@value) = {literal}]"
        return f"./option{normalized}|./optgroup/option{normalized}"


@dataclass(frozen=True)
class ResolutionStep:
    """
    A named query generator.

    Attributes:
        name: Strategy name reported in the resolution
        generator: Builds the query from an escaped literal
        scoped_only: Only meaningful inside a scope element; skipped at document level
    """
    name: str
    generator: QueryGenerator
    scoped_only: bool = False


@dataclass(frozen=True)
class ResolutionChain:
    """
    Ordered query generators for one element class.

    Attributes:
        name: Element class, used in logs and "not found" messages
        steps: Generators tried in order until one matches
        raw_fallback: Finally try the fuzzy text as a CSS selector
    """
    name: str
    steps: Tuple[ResolutionStep, ...]
    raw_fallback: bool = True

    @property
    def strategy_names(self) -> Tuple[str, ...]:
        names = tuple(step.name for step in self.steps)
        return names + ("raw",) if self.raw_fallback else names


CLICKABLE_CHAIN = ResolutionChain(
    name="clickable",
    steps=(
        ResolutionStep("narrow", Clickable.narrow),
        ResolutionStep("wide", Clickable.wide),
        ResolutionStep("self", Clickable.self_, scoped_only=True),
    ),
)

CHECKABLE_CHAIN = ResolutionChain(
    name="checkable",
    steps=(
        ResolutionStep("by_text", Checkable.by_text),
        ResolutionStep("by_name", Checkable.by_name),
    ),
)

FIELD_CHAIN = ResolutionChain(
    name="field",
    steps=(
        ResolutionStep("label_equals", Field.label_equals),
        ResolutionStep("label_contains", Field.label_contains),
        ResolutionStep("by_name", Field.by_name),
    ),
)

OPTION_CHAIN = ResolutionChain(
    name="option",
    steps=(
        ResolutionStep("by_visible_text", Select.by_visible_text),
        ResolutionStep("by_value", Select.by_value),
    ),
    raw_fallback=False,
)

CHAINS = {
    chain.name: chain
    for chain in (CLICKABLE_CHAIN, CHECKABLE_CHAIN, FIELD_CHAIN, OPTION_CHAIN)
}
