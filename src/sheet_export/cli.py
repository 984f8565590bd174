"""
Command-line interface for Sheet Export using Typer.
"""

from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console

from . import __version__
from .errors import SheetExportError
from .logging_utils import (
    setup_logging,
    print_headers_table,
    print_preview_table,
    print_success_message,
    print_error_message,
)
from .pipeline import discover_headers, process

app = typer.Typer(
    name="sheet-export",
    help="Filter a spreadsheet's rows and export selected columns as CSV, XLSX or vCard",
    add_completion=False
)

console = Console()

InputOption = Annotated[
    Path,
    typer.Option("--input", "-i", help="Path to input .xlsx or .xls file", exists=True, file_okay=True, dir_okay=False)
]
FilterColumnOption = Annotated[
    Optional[List[str]],
    typer.Option("--filter-column", "-f", help="Column to test against the query (repeatable)")
]
QueryOption = Annotated[
    str,
    typer.Option("--query", "-q", help="Text to match; empty disables filtering")
]
MatchOption = Annotated[
    str,
    typer.Option("--match", "-m", help="Match mode: 'contains' or 'exact'")
]
CaseOption = Annotated[
    bool,
    typer.Option("--case-sensitive", help="Compare text verbatim instead of lower-cased")
]
ColumnOption = Annotated[
    Optional[List[str]],
    typer.Option("--column", "-c", help="Column to export, in order (repeatable)")
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging")
]


@app.command()
def headers(input_file: InputOption, verbose: VerboseOption = False) -> None:
    """
    List the column headers of the first sheet.
    """
    setup_logging(verbose)

    try:
        names = discover_headers(input_file.read_bytes(), input_file.name)
    except SheetExportError as e:
        print_error_message(e.message, console)
        raise typer.Exit(1)

    print_headers_table(names, input_file.name, console)


@app.command()
def preview(
    input_file: InputOption,
    filter_column: FilterColumnOption = None,
    query: QueryOption = "",
    match: MatchOption = "contains",
    case_sensitive: CaseOption = False,
    column: ColumnOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=1, help="Rows to show (default: SHEET_EXPORT_PREVIEW_LIMIT or 10)")
    ] = None,
    verbose: VerboseOption = False,
) -> None:
    """
    Show the first matching rows and the total number of matches.

    Without --column the preview shows every column of the sheet.

    Examples:

        sheet-export preview -i contacts.xlsx -f City -q berlin
    """
    setup_logging(verbose)

    try:
        result = process(
            input_file.read_bytes(),
            input_file.name,
            filter_columns=filter_column or [],
            filter_value=query,
            match_type=match,
            case_sensitive=case_sensitive,
            export_columns=column or [],
            preview_only=True,
            preview_limit=limit
        )
    except SheetExportError as e:
        print_error_message(e.message, console)
        raise typer.Exit(1)

    print_preview_table(result, console)


@app.command()
def export(
    input_file: InputOption,
    export_format: Annotated[
        str,
        typer.Option("--format", "-F", help="Export format: 'csv', 'xlsx' or 'vcf'")
    ] = "csv",
    filter_column: FilterColumnOption = None,
    query: QueryOption = "",
    match: MatchOption = "contains",
    case_sensitive: CaseOption = False,
    column: ColumnOption = None,
    prefix: Annotated[
        str,
        typer.Option("--prefix", help="vCard only: text placed before each contact name")
    ] = "",
    suffix: Annotated[
        str,
        typer.Option("--suffix", help="vCard only: text placed after each contact name")
    ] = "",
    out: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output directory")
    ] = Path("."),
    verbose: VerboseOption = False,
) -> None:
    """
    Export the matching rows' selected columns to a file.

    For vCard output the selected columns are the phone columns; the contact
    name comes from the first name-like column of the sheet.

    Examples:

        # Rows whose Status is exactly "active", two columns as CSV
        sheet-export export -i crm.xlsx -f Status -q active -m exact -c Name -c Email

        # One card per filled phone column, names prefixed
        sheet-export export -i crm.xlsx -F vcf -c Mobile -c Office --prefix "ACME"
    """
    setup_logging(verbose)

    try:
        result = process(
            input_file.read_bytes(),
            input_file.name,
            filter_columns=filter_column or [],
            filter_value=query,
            match_type=match,
            case_sensitive=case_sensitive,
            export_columns=column or [],
            export_format=export_format,
            contact_prefix=prefix,
            contact_suffix=suffix
        )
    except SheetExportError as e:
        print_error_message(e.message, console)
        raise typer.Exit(1)

    out.mkdir(parents=True, exist_ok=True)
    output_path = out / result.filename
    output_path.write_bytes(result.content)

    print_success_message(result, str(output_path), console)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"sheet-export version {__version__}")


if __name__ == "__main__":
    app()
