"""
Sheet Export - filter spreadsheet rows and export selected columns.

This package decodes the first sheet of an uploaded .xlsx/.xls document,
filters its rows by substring or exact match, projects the chosen columns and
encodes them as CSV, an XLSX workbook, or a vCard contact bundle.
"""

__version__ = "0.1.0"

from .core import FilterSpec, MatchMode, filter_rows, project_rows
from .errors import SheetExportError
from .exporters import ExportFormat, ExportSpec, encode
from .io_utils import Table, load_table
from .pipeline import ExportResult, PreviewResult, discover_headers, process

__all__ = [
    "FilterSpec",
    "MatchMode",
    "filter_rows",
    "project_rows",
    "SheetExportError",
    "ExportFormat",
    "ExportSpec",
    "encode",
    "Table",
    "load_table",
    "ExportResult",
    "PreviewResult",
    "discover_headers",
    "process",
]
