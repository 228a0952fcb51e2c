"""Anki note commands."""

import httpx
import typer
from rich.panel import Panel
from rich.table import Table

from lexicard.cli.utils.async_runner import run_with_services
from lexicard.cli.utils.console import console, error_console, print_record
from lexicard.dependencies import Services
from lexicard.models import WordRecord
from lexicard.services.anki import AnkiConnectError
from lexicard.services.lookup import InvalidWordError, WordNotFoundError


async def add_word(
    services: Services,
    word: str,
    lang: str,
    deck: str | None = None,
    model: str | None = None,
    with_image: bool = True,
) -> tuple[WordRecord, int, str | None]:
    """Look the word up, attach the first real image and create the note."""
    record = await services.lookup.search(word, lang)

    image_filename = None
    if with_image:
        built = await services.query_builder.build(
            record.word, record.example, record.meaning, lang
        )
        candidates = await services.images.resolve(built or record.word, record.word, lang)
        real = [c for c in candidates if not c.is_placeholder]
        if real:
            try:
                image_filename = await services.media.save_from_url(real[0].full_url)
                await services.anki.store_media_file(
                    image_filename, path=str((services.media_dir / image_filename).resolve())
                )
            except httpx.HTTPError as e:
                error_console.print(f"[warning]Image skipped: {e}[/]")
                image_filename = None

    note_id = await services.anki.add_word_note(record, deck, model, image_filename)
    return record, note_id, image_filename


def add(
    word: str = typer.Argument(..., help="Word to add"),
    lang: str = typer.Option("en", "--lang", "-l", help="Language code (en, es)"),
    deck: str | None = typer.Option(None, "--deck", "-d", help="Target deck"),
    model: str | None = typer.Option(None, "--model", "-m", help="Note type"),
    no_image: bool = typer.Option(False, "--no-image", help="Skip image search"),
) -> None:
    """Look up a word and add it to Anki as a new note."""
    try:
        record, note_id, image = run_with_services(
            lambda services: add_word(services, word, lang, deck, model, not no_image)
        )
    except (InvalidWordError, WordNotFoundError) as e:
        error_console.print(f"[error]{e}[/]")
        raise typer.Exit(1) from None
    except (AnkiConnectError, httpx.HTTPError) as e:
        error_console.print(f"[error]Could not add note: {e}[/]")
        raise typer.Exit(1) from None

    print_record(record)
    suffix = f" with image {image}" if image else ""
    console.print(f"[success]Added note {note_id}{suffix}[/]")


def decks() -> None:
    """Show AnkiConnect status, decks and note types."""

    async def _decks(services: Services) -> tuple[list[str], list[str]] | None:
        if not await services.anki.is_available():
            return None
        return await services.anki.deck_names(), await services.anki.model_names()

    try:
        result = run_with_services(_decks)
    except AnkiConnectError as e:
        error_console.print(f"[error]{e}[/]")
        raise typer.Exit(1) from None

    if result is None:
        error_console.print("[error]Anki is not running or AnkiConnect is not installed.[/]")
        raise typer.Exit(1)

    deck_names, model_names = result
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Decks")
    table.add_column("Note types")
    for i in range(max(len(deck_names), len(model_names))):
        table.add_row(
            deck_names[i] if i < len(deck_names) else "",
            model_names[i] if i < len(model_names) else "",
        )
    console.print(Panel(table, title="[bold]Anki[/]", border_style="blue"))
