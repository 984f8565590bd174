"""
I/O utilities for decoding uploaded spreadsheets and naming exports.
"""

import io
import logging
import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, Dict, List, Tuple

import pandas as pd

from .errors import EmptyDataError, NoHeadersError, NoSheetsError, UnreadableDocumentError

logger = logging.getLogger(__name__)

Row = Dict[str, str]


@dataclass(frozen=True)
class Table:
    """Headers and rows decoded from the first sheet of a document."""

    headers: List[str] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)


def cell_to_text(value: Any) -> str:
    """
    Render a decoded cell value as the text shown for it in a spreadsheet.

    Args:
        value: Raw cell value from the reading engine

    Returns:
        Text form of the cell; empty string for empty cells
    """
    if value is None or value is pd.NaT or value is pd.NA:
        return ""

    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"

    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # Legacy .xls stores every number as a float
        if value.is_integer():
            return str(int(value))
        return str(value)

    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")

    if isinstance(value, (date, time)):
        return value.isoformat()

    return str(value)


def load_table(data: bytes, *, allow_empty: bool = False) -> Table:
    """
    Decode a spreadsheet blob into headers and rows.

    Only the first sheet is read; later sheets are ignored. Header names come
    from the first non-blank row. When a header name repeats, the header is
    listed once and each row keeps the value of the right-most such column.

    Args:
        data: Raw bytes of an .xlsx or .xls document
        allow_empty: Return an empty table instead of failing when the sheet
            has no data rows

    Returns:
        Decoded table

    Raises:
        UnreadableDocumentError: If the bytes are not a readable workbook
        NoSheetsError: If the workbook has no sheets
        EmptyDataError: If the first sheet has no data rows
        NoHeadersError: If no column headers could be detected
    """
    try:
        excel = pd.ExcelFile(io.BytesIO(data))
    except Exception as e:
        logger.debug(f"Workbook decode failed: {e}")
        raise UnreadableDocumentError() from e

    with excel:
        sheet_names = excel.sheet_names
        if not sheet_names:
            raise NoSheetsError()

        first_sheet = sheet_names[0]
        logger.debug(f"Reading sheet '{first_sheet}' of {len(sheet_names)}")

        try:
            frame = excel.parse(
                first_sheet,
                header=None,
                dtype=object,
                keep_default_na=False,
                na_filter=False,
            )
        except Exception as e:
            logger.debug(f"Sheet '{first_sheet}' could not be read: {e}")
            raise UnreadableDocumentError() from e

    records = [[cell_to_text(value) for value in record] for record in frame.values.tolist()]
    records = [record for record in records if any(record)]

    if len(records) < 2:
        if allow_empty:
            return Table()
        raise EmptyDataError()

    header_cells, body = records[0], records[1:]
    columns = _resolve_header_columns(header_cells, body)

    headers: List[str] = []
    for _, name in columns:
        if name not in headers:
            headers.append(name)

    if not headers:
        raise NoHeadersError()

    if len(headers) < len(columns):
        logger.warning(f"Duplicate header names collapsed: {len(columns)} columns -> {len(headers)} headers")

    rows: List[Row] = []
    for record in body:
        row: Row = {header: "" for header in headers}
        for col_idx, name in columns:
            row[name] = record[col_idx]
        rows.append(row)

    logger.info(f"Loaded {len(rows)} rows with {len(headers)} columns from sheet '{first_sheet}'")
    return Table(headers=headers, rows=rows)


def _resolve_header_columns(header_cells: List[str], body: List[List[str]]) -> List[Tuple[int, str]]:
    """
    Pair each usable column index with its header name.

    Blank headers over columns that carry data are named ``Unnamed_{i}``;
    blank headers over all-blank columns are dropped.
    """
    columns = []
    for col_idx, cell in enumerate(header_cells):
        name = cell.strip()
        if not name:
            if not any(record[col_idx].strip() for record in body):
                continue
            name = f"Unnamed_{col_idx}"
        columns.append((col_idx, name))
    return columns


def has_supported_extension(filename: str, extensions) -> bool:
    """Check a declared filename against the supported extensions."""
    if not filename:
        return False
    return PurePath(filename).suffix.lower() in extensions


def sanitize_filename(text: str) -> str:
    """
    Sanitize text for use as a filename.

    Args:
        text: Text to sanitize

    Returns:
        Sanitized filename-safe text
    """
    if not text or not text.strip():
        return "Unknown"

    # Invalid chars: < > : " | ? * \ /
    sanitized = re.sub(r'[<>:"|?*\\/]', '_', text.strip())

    sanitized = re.sub(r'\s+', ' ', sanitized)

    # Leading/trailing dots and spaces are problematic on Windows
    sanitized = sanitized.strip('. ')

    if len(sanitized) > 200:
        sanitized = sanitized[:200].strip()

    if not sanitized:
        return "Unknown"

    return sanitized


def export_filename(source_name: str, suffix: str, extension: str) -> str:
    """
    Build the suggested download name for an export.

    Args:
        source_name: Declared name of the uploaded file
        suffix: Text appended to the base name
        extension: Extension of the export format, without a dot

    Returns:
        ``{base name}{suffix}.{extension}``
    """
    # Declared names may carry client-side path components
    base_name = PurePath(source_name.replace("\\", "/")).name
    base_name = re.sub(r'\.[^.]+$', '', base_name)
    return f"{sanitize_filename(base_name)}{suffix}.{extension}"
