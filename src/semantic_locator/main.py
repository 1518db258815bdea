"""
Semantic Locator - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--default-type, --custom-attribute, etc.)
    2. Config file (locator.yaml)
    3. Environment variables (SEMANTIC_LOCATOR__CUSTOM_LOCATOR__ENABLED, etc.)

Usage:
    semantic-locator classify "#login"
    semantic-locator xpath "p > #user"
    semantic-locator resolve "Sign In" --html page.html --kind clickable
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from semantic_locator.browsers.document_search import DocumentSearch
from semantic_locator.config import configure, get_settings
from semantic_locator.engine.classifier import classify as classify_locator
from semantic_locator.engine.resolver import SemanticResolver
from semantic_locator.engine.strategies import CHAINS
from semantic_locator.exceptions import LocatorEngineError
from semantic_locator.utils.logging import setup_logging as configure_logging

# Create the CLI app
app = typer.Typer(
    name="semantic-locator",
    help="Classify, compile and resolve human-friendly element locators",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False):
    """Configure logging from settings; --verbose forces DEBUG."""
    logging_settings = get_settings().logging
    configure_logging(
        level="DEBUG" if verbose else logging_settings.level,
        log_file=logging_settings.file,
        json_format=logging_settings.json_format,
        log_format=logging_settings.format,
    )


def _configure(
    custom_attribute: Optional[str],
    custom_prefix: Optional[str],
    default_type: Optional[str],
):
    """Install the filter pipeline from config, with CLI overrides."""
    settings = get_settings()
    overrides = {}
    if custom_attribute:
        overrides["custom_locator"] = {"enabled": True, "attribute": custom_attribute}
        if custom_prefix:
            overrides["custom_locator"]["prefix"] = custom_prefix
    if default_type:
        overrides["locator"] = {"default_type": default_type}
    if overrides:
        settings = settings.merge_with(overrides)
    configure(settings)


@app.command()
def classify(
    locator: str = typer.Argument(..., help="Locator to classify"),
    default_type: Optional[str] = typer.Option(None, "--default-type", "-d", help="Type for unmarked strings"),
    custom_attribute: Optional[str] = typer.Option(None, "--custom-attribute", help="Enable $shorthand for this attribute"),
    custom_prefix: Optional[str] = typer.Option(None, "--custom-prefix", help="Prefix for the custom shorthand"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Show how a locator is classified.

    Examples:
        semantic-locator classify "#login"
        semantic-locator classify "$save" --custom-attribute data-qa
    """
    setup_logging(verbose)
    _configure(custom_attribute, custom_prefix, default_type)

    located = classify_locator(locator)
    table = Table(title="Locator", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("type", escape(str(located.type_name)))
    table.add_row("value", escape(str(located.value)))
    table.add_row("strict", str(located.is_strict()))
    table.add_row("executable", escape(str(located.simplify())))
    table.add_row("display", escape(str(located)))
    console.print(table)


@app.command()
def xpath(
    locator: str = typer.Argument(..., help="CSS or XPath locator to compile"),
    custom_attribute: Optional[str] = typer.Option(None, "--custom-attribute", help="Enable $shorthand for this attribute"),
    custom_prefix: Optional[str] = typer.Option(None, "--custom-prefix", help="Prefix for the custom shorthand"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Compile a locator to XPath.

    Unmarked strings are treated as CSS.
    """
    setup_logging(verbose)
    _configure(custom_attribute, custom_prefix, None)

    try:
        compiled = classify_locator(locator, default_type="css").to_xpath()
    except LocatorEngineError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    console.print(compiled, markup=False, highlight=False, soft_wrap=True)


@app.command()
def resolve(
    locator: str = typer.Argument(..., help="Locator or human-readable text"),
    html: Path = typer.Option(..., "--html", help="HTML file to search", exists=True, dir_okay=False),
    kind: str = typer.Option("clickable", "--kind", "-k", help="Element class: clickable, checkable, field, option"),
    scope: Optional[str] = typer.Option(None, "--scope", "-s", help="Only search inside this element"),
    custom_attribute: Optional[str] = typer.Option(None, "--custom-attribute", help="Enable $shorthand for this attribute"),
    custom_prefix: Optional[str] = typer.Option(None, "--custom-prefix", help="Prefix for the custom shorthand"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Resolve a locator against a static HTML page.

    Examples:
        semantic-locator resolve "Sign In" --html login.html
        semantic-locator resolve "Remember Me" --html login.html --kind checkable
        semantic-locator resolve "Germany" --html login.html --kind option --scope "select[name=country]"
    """
    setup_logging(verbose)
    if kind not in CHAINS:
        console.print(f"[red]Error: Unknown kind {escape(repr(kind))}.[/red] Use one of: {', '.join(CHAINS)}.")
        raise typer.Exit(2)
    if kind == "option" and not scope:
        # Option queries are relative to the <select> element
        console.print("[red]Error: --kind option needs --scope pointing at a <select>.[/red]")
        raise typer.Exit(2)
    _configure(custom_attribute, custom_prefix, None)

    resolver = SemanticResolver(DocumentSearch.from_file(html))
    try:
        resolution = resolver.resolve(locator, CHAINS[kind], scope)
    except LocatorEngineError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not resolution.found:
        console.print(Panel.fit(
            f"[bold red]Not found[/bold red]\n"
            f"[dim]Locator:[/dim] {escape(str(resolution.locator))}\n"
            f"[dim]Tried:[/dim] {', '.join(resolution.attempts)}",
            border_style="red",
        ))
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]Found {len(resolution.elements)} element(s)[/bold green]\n"
        f"[dim]Locator:[/dim] {escape(str(resolution.locator))}\n"
        f"[dim]Strategy:[/dim] {resolution.strategy}\n"
        f"[dim]Tried:[/dim] {', '.join(resolution.attempts)}",
        border_style="green",
    ))
    console.print(str(resolution.query.value), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
