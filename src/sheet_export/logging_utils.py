"""
Logging configuration and console output using Rich.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .pipeline import ExportResult, PreviewResult


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging with Rich handler.

    Args:
        verbose: Whether to enable debug-level logging
    """
    # Logs go to stderr so command output stays clean
    console = Console(stderr=True)

    # Configure logging level
    level = logging.DEBUG if verbose else logging.INFO

    # Create Rich handler
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True
    )

    # Install as the only root handler
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[rich_handler],
        force=True
    )

    # Reduce noise from other libraries
    logging.getLogger("openpyxl").setLevel(logging.WARNING)
    logging.getLogger("xlsxwriter").setLevel(logging.WARNING)


def print_headers_table(headers: List[str], source: str, console: Optional[Console] = None) -> None:
    """
    Print the discovered header names with their positions.

    Args:
        headers: Header names in sheet order
        source: Name of the file the headers came from
        console: Rich console instance (creates new one if None)
    """
    if console is None:
        console = Console()

    table = Table(title=f"Columns in {escape(source)}", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Header", style="white")

    for idx, header in enumerate(headers, start=1):
        table.add_row(str(idx), escape(header))

    console.print()
    console.print(table)


def print_preview_table(result: PreviewResult, console: Optional[Console] = None) -> None:
    """
    Print preview rows followed by the shown/total row counts.

    Args:
        result: Preview rows and the true filtered total
        console: Rich console instance (creates new one if None)
    """
    if console is None:
        console = Console()

    if not result.rows:
        console.print()
        console.print("[yellow]No rows matched the filter criteria.[/yellow]")
        return

    # Columns follow the projected row order
    table = Table(title="Preview", show_header=True, header_style="bold green")
    for column in result.rows[0]:
        table.add_column(escape(column), style="white", overflow="fold")

    # Cell text is escaped so brackets print literally
    for row in result.rows:
        table.add_row(*(escape(row[column]) for column in result.rows[0]))

    console.print()
    console.print(table)
    console.print(f"Showing [bold]{len(result.rows)}[/bold] of [bold]{result.total}[/bold] matching rows")


def print_success_message(result: ExportResult, output_path: str, console: Optional[Console] = None) -> None:
    """
    Print a success message with the written file.

    Args:
        result: Export payload metadata
        output_path: Where the payload was written
        console: Rich console instance (creates new one if None)
    """
    if console is None:
        console = Console()

    console.print()
    console.print(f"[bold green]Exported {len(result.content)} bytes ({result.media_type}) to:[/bold green]")
    console.print(f"   [cyan]{output_path}[/cyan]")


def print_error_message(error: str, console: Optional[Console] = None) -> None:
    """
    Print an error message with Rich formatting.

    Args:
        error: Error message to display
        console: Rich console instance (creates new one if None)
    """
    if console is None:
        console = Console()

    console.print()
    console.print(f"[bold red]Error:[/bold red] {escape(error)}", highlight=False)
