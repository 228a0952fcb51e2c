"""Word and image lookup commands."""

import typer
from rich.table import Table

from lexicard.cli.utils.async_runner import run_with_services
from lexicard.cli.utils.console import console, error_console, print_record
from lexicard.dependencies import Services
from lexicard.models import ImageCandidate, WordRecord
from lexicard.services.lookup import InvalidWordError, WordNotFoundError


def lookup(
    word: str = typer.Argument(..., help="Word to look up"),
    lang: str = typer.Option("en", "--lang", "-l", help="Language code (en, es)"),
) -> None:
    """Look up a word's pronunciation, meaning and example."""

    async def _lookup(services: Services) -> WordRecord:
        return await services.lookup.search(word, lang)

    try:
        record = run_with_services(_lookup)
    except (InvalidWordError, WordNotFoundError) as e:
        error_console.print(f"[error]{e}[/]")
        raise typer.Exit(1) from None

    print_record(record)


def images(
    query: str = typer.Argument(..., help="Word or phrase to find images for"),
    lang: str = typer.Option("en", "--lang", "-l", help="Language code (en, es)"),
    example: str = typer.Option("", "--example", "-e", help="Example sentence for context"),
    meaning: str = typer.Option("", "--meaning", "-m", help="Meaning for context"),
) -> None:
    """Suggest images for a word."""

    async def _images(services: Services) -> tuple[str, list[ImageCandidate]]:
        built = await services.query_builder.build(query, example, meaning, lang)
        return built, await services.images.resolve(built or query, query, lang)

    built, found = run_with_services(_images)

    console.print(f"[dim]Search query:[/] [info]{built}[/]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Preview")
    table.add_column("Full size")
    for i, image in enumerate(found, 1):
        label = " [warning](placeholder)[/]" if image.is_placeholder else ""
        table.add_row(str(i), image.preview_url + label, image.full_url)
    console.print(table)
