"""Main CLI application entry point."""

import typer

from lexicard.cli.commands import anki, words
from lexicard.config import settings

app = typer.Typer(
    name="lexicard",
    help="Vocabulary lookup and Anki card builder",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def startup() -> None:
    """Initialize application on startup."""
    settings.data_dir.mkdir(parents=True, exist_ok=True)


app.command(name="lookup", help="Look up a word")(words.lookup)
app.command(name="images", help="Suggest images for a word")(words.images)
app.command(name="add", help="Look up a word and add it to Anki")(anki.add)
app.command(name="decks", help="List Anki decks and note types")(anki.decks)


@app.command(name="serve", help="Run the HTTP API")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Start the FastAPI server with uvicorn."""
    from lexicard.main import run

    run(host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
