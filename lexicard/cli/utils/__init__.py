"""CLI utility modules."""

from lexicard.cli.utils.async_runner import run_with_services
from lexicard.cli.utils.console import console, error_console, print_record

__all__ = ["run_with_services", "console", "error_console", "print_record"]
