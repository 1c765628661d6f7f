"""Command-line interface for text anchoring."""

import logging
from pathlib import Path

import typer
from rich.console import Console

from anchoring import __version__
from anchoring.config import validate_max_errors
from anchoring.content_hash import compute_content_hash, has_content_changed
from anchoring.logging_config import setup_logging
from anchoring.models import TextSelector
from anchoring.search import search as approximate_search
from anchoring.selectors import compute_selector, reanchor_highlight, selector_at

app = typer.Typer(
    name="textanchor",
    help="Anchor quotes to document offsets and re-anchor them after edits.",
)
console = Console()


@app.callback()
def main_options(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log candidate scoring"
    ),
) -> None:
    """Configure logging for all commands."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def _read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e


@app.command()
def locate(
    document: Path = typer.Argument(..., help="Path to the document text"),
    quote: str = typer.Argument(..., help="Quote to anchor"),
    hint: int | None = typer.Option(
        None, "--hint", help="Offset where the quote is expected to start"
    ),
) -> None:
    """Compute a selector for QUOTE and print it as an annotation target."""
    text = _read_document(document)

    selector = compute_selector(text, quote, hint)
    if selector is None:
        console.print("[bold red]Not found:[/bold red] quote could not be anchored")
        raise typer.Exit(1)

    console.print(
        f"[green]Anchored[/green] at [{selector.start_offset}, {selector.end_offset})"
    )
    console.print(selector.to_annotation(), markup=False, highlight=False)


@app.command()
def reanchor(
    document: Path = typer.Argument(..., help="Path to the current document text"),
    annotation: Path = typer.Argument(..., help="Path to the stored annotation YAML"),
) -> None:
    """Relocate a stored annotation in a possibly edited document."""
    text = _read_document(document)

    try:
        stored = TextSelector.from_annotation(_read_document(annotation))
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    if stored.is_valid_for(text):
        console.print("[green]Unchanged:[/green] stored offsets are still valid")
        return

    position = reanchor_highlight(text, stored)
    if position is None:
        console.print("[bold red]Orphaned:[/bold red] quote could not be re-anchored")
        raise typer.Exit(1)

    console.print(
        f"[yellow]Moved[/yellow] [{stored.start_offset}, {stored.end_offset}) "
        f"-> [{position.start_offset}, {position.end_offset})"
    )
    updated = selector_at(text, position.start_offset, position.end_offset)
    console.print(updated.to_annotation(), markup=False, highlight=False)


@app.command()
def search(
    document: Path = typer.Argument(..., help="Path to the document text"),
    pattern: str = typer.Argument(..., help="Pattern to search for"),
    max_errors: int = typer.Option(
        2, "--max-errors", "-k", help="Maximum edit distance"
    ),
) -> None:
    """List approximate occurrences of PATTERN."""
    try:
        validate_max_errors(max_errors)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    text = _read_document(document)
    matches = approximate_search(text, pattern, max_errors)
    if not matches:
        console.print("[dim]No matches[/dim]")
        return

    for match in matches:
        console.print(
            f"[{match.start}, {match.end}) errors={match.errors}: "
            f"{text[match.start : match.end]!r}",
            markup=False,
            highlight=False,
        )


@app.command("hash")
def content_hash(
    document: Path = typer.Argument(..., help="Path to the document text"),
    check: str | None = typer.Option(
        None, "--check", help="Stored digest to compare against"
    ),
) -> None:
    """Print the content digest, or compare it with a stored one."""
    text = _read_document(document)

    if check is None:
        console.print(compute_content_hash(text))
        return

    if has_content_changed(text, check):
        console.print("[yellow]Changed:[/yellow] highlights need re-anchoring")
        raise typer.Exit(1)
    console.print("[green]Unchanged[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"textanchor {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
