"""
XPath helpers - literal escaping, unions and CSS to XPath conversion.

CSS conversion is delegated to cssselect. Two translators are used:

- BASIC: ``GenericTranslator`` for plain selectors
- EXTENDED: an ``HTMLTranslator`` subclass for selectors using structural or
  form-state pseudo-classes (``:nth-child``, ``:checked``, ``:required``, ...)

The choice is a pure text scan of the selector, not a retry on failure.
"""

import logging
import re
from typing import Iterable, List

from cssselect import ExpressionError, GenericTranslator, HTMLTranslator, SelectorError, parse

from semantic_locator.exceptions.locator import InvalidLocatorError

logger = logging.getLogger(__name__)

# Relative prefix so compiled queries can run against a scoped element
RELATIVE_PREFIX = ".//"

EXTENDED_PSEUDO_MARKERS = (
    ":nth-of-type",
    ":nth-last-of-type",
    ":first-of-type",
    ":last-of-type",
    ":nth-child",
    ":nth-last-child",
    ":last-child",
    ":has(",
    ":lang(",
    ":checked",
    ":disabled",
    ":enabled",
    ":required",
)


class FormStateTranslator(HTMLTranslator):
    """HTML translator that also understands ``:required``."""

    def xpath_required_pseudo(self, xpath):
        return xpath.add_condition(
            "@required and (name(.) = 'input' or name(.) = 'select' or name(.) = 'textarea')"
        )


_basic_translator = GenericTranslator()
_extended_translator = FormStateTranslator()


def literal(text: str) -> str:
    """
    Escape text as an XPath string literal.

    XPath 1.0 has no escape sequences, so a value containing both quote
    kinds is split and joined back with ``concat()``.

    Example:
        >>> literal("Sign In")
        "'Sign In'"
        >>> literal("It's")
        '"It\\'s"'
        >>> literal("say \\"it's\\"")
        'concat(\\'say "it\\', "\\'", \\'s"\\')'
    """
    text = str(text)
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = [f"'{part}'" for part in text.split("'")]
    return "concat(" + ", \"'\", ".join(parts) + ")"


def combine(locators: Iterable[str]) -> str:
    """Join XPath expressions into one union expression."""
    return " | ".join(locators)


def needs_extended_translator(css: str) -> bool:
    """Check whether a CSS selector uses pseudo-classes only the extended translator supports."""
    return any(marker in css for marker in EXTENDED_PSEUDO_MARKERS)


def css_to_xpath(css: str, pseudo_suffix: str = "") -> str:
    """
    Convert a CSS selector to a relative XPath expression.

    Args:
        css: CSS selector (groups separated by commas are allowed)
        pseudo_suffix: Extra CSS pseudo-class appended to the selector text
            before conversion (e.g. ``":checked"``)

    Returns:
        XPath expression starting with ``.//``

    Raises:
        InvalidLocatorError: If the selector can't be parsed or translated
    """
    selector_text = f"{css}{pseudo_suffix}"
    if needs_extended_translator(selector_text):
        translator = _extended_translator
    else:
        translator = _basic_translator

    try:
        selectors = parse(selector_text)
        for selector in selectors:
            # cssselect drops pseudo-elements silently, which would widen the match
            if selector.pseudo_element:
                raise ExpressionError(f"pseudo-element ::{selector.pseudo_element} has no XPath form")
        expressions: List[str] = [
            translator.selector_to_xpath(selector, prefix=RELATIVE_PREFIX)
            for selector in selectors
        ]
    except (SelectorError, ExpressionError) as e:
        raise InvalidLocatorError(
            f"CSS selector '{selector_text}' can't be converted to XPath: {e}",
            locator=selector_text,
        ) from e

    xpath = combine(expressions)
    logger.debug(f"CSS '{selector_text}' -> XPath '{xpath}' ({type(translator).__name__})")
    return xpath


_LEADING_AXIS = re.compile(r"^[./]+")


def strip_leading_axis(xpath: str) -> str:
    """Remove leading ``./``, ``.//`` and ``//`` so the expression can be used as a step."""
    return _LEADING_AXIS.sub("", xpath)
