"""Rich console configuration."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from lexicard.models import WordRecord

custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "word": "magenta",
        "ipa": "blue",
        "dim": "dim",
    }
)

# Main console for output
console = Console(theme=custom_theme)

# Error console for stderr
error_console = Console(theme=custom_theme, stderr=True)


def print_record(record: WordRecord) -> None:
    """Render a looked-up word as a small table."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Word", f"[word]{record.word}[/]")
    table.add_row("IPA", f"[ipa]{record.pronunciation}[/]" if record.pronunciation else "[dim]-[/]")
    table.add_row("Meaning", record.meaning or "[dim]-[/]")
    table.add_row("Example", record.example)
    console.print(
        Panel(table, title=f"[bold]{record.word}[/] ({record.language_code})", border_style="blue")
    )
