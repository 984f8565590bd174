"""
Export encoders for delimited text, workbook and contact-card output.
"""

import io
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import pandas as pd
import xlsxwriter  # type: ignore

from .config import get_settings
from .core import project_rows
from .detect import find_name_header
from .errors import EncodingFailureError

logger = logging.getLogger(__name__)

CRLF = "\r\n"
LINE_BREAKS = re.compile(r"[\r\n]+")


class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"
    VCF = "vcf"


@dataclass(frozen=True)
class ExportSpec:
    columns: List[str] = field(default_factory=list)
    format: ExportFormat = ExportFormat.CSV
    contact_prefix: str = ""
    contact_suffix: str = ""


@dataclass(frozen=True)
class ExportPayload:
    content: bytes
    media_type: str
    extension: str


def export_csv(rows: Sequence[Mapping[str, str]], spec: ExportSpec) -> ExportPayload:
    """
    Export rows as comma-separated values.

    Args:
        rows: Filtered rows
        spec: Export columns give both the header row and the field order

    Returns:
        UTF-8 encoded CSV payload
    """
    try:
        df = pd.DataFrame(project_rows(rows, spec.columns), columns=spec.columns, dtype=object)
        # RFC 4180 record separator; any CR or LF inside a field gets quoted
        text = df.to_csv(index=False, lineterminator="\r\n")
        content = text.encode("utf-8")
    except Exception as e:
        logger.error(f"Failed to generate CSV output: {e}")
        raise EncodingFailureError("Failed to generate CSV output.") from e

    logger.info(f"Encoded {len(rows)} rows as CSV ({len(content)} bytes)")
    return ExportPayload(content=content, media_type="text/csv; charset=utf-8", extension="csv")


def export_xlsx(
    rows: Sequence[Mapping[str, str]],
    spec: ExportSpec,
    sheet_name: Optional[str] = None
) -> ExportPayload:
    """
    Export rows as a single-sheet workbook (pandas + xlsxwriter).

    Args:
        rows: Filtered rows
        spec: Export columns give the header row and column order
        sheet_name: Title of the output sheet (defaults to the configured name)

    Returns:
        XLSX payload
    """
    sheet_name = sheet_name or get_settings().export_sheet_name
    buffer = io.BytesIO()

    try:
        # Column order of the frame is the export column order
        df = pd.DataFrame(project_rows(rows, spec.columns), columns=spec.columns, dtype=object)

        # Cell text is data, never a formula or hyperlink
        with pd.ExcelWriter(
            buffer,
            engine='xlsxwriter',
            engine_kwargs={'options': {'strings_to_formulas': False, 'strings_to_urls': False}}
        ) as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)

            workbook = writer.book
            worksheet = writer.sheets[sheet_name]

            # Freeze the header row
            worksheet.freeze_panes(1, 0)

            # Add autofilter over the data range
            if not df.empty:
                last_col = xlsxwriter.utility.xl_col_to_name(len(df.columns) - 1)
                worksheet.autofilter(f'A1:{last_col}{len(df) + 1}')

            # Format header row
            header_format = workbook.add_format({
                'bold': True,
                'bg_color': '#D9E1F2',
                'border': 1
            })

            for col_idx, col_name in enumerate(df.columns):
                worksheet.write(0, col_idx, col_name, header_format)
                # Width from header length
                worksheet.set_column(col_idx, col_idx, len(str(col_name)) + 2)

        content = buffer.getvalue()
    except Exception as e:
        logger.error(f"Failed to generate workbook output: {e}")
        raise EncodingFailureError("Failed to generate workbook output.") from e

    logger.info(f"Encoded {len(rows)} rows as workbook sheet '{sheet_name}' ({len(content)} bytes)")
    return ExportPayload(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        extension="xlsx"
    )


def export_vcf(rows: Sequence[Mapping[str, str]], spec: ExportSpec) -> ExportPayload:
    """
    Export one vCard per non-blank phone cell.

    Every export column is treated as a phone column. A row contributes one
    card for each of its non-blank phone cells, all sharing the row's display
    name.

    Args:
        rows: Filtered rows with their full header set
        spec: Phone columns and optional name prefix/suffix

    Returns:
        vCard 3.0 payload; empty when no phone cell is filled
    """
    cards = []

    for index, row in enumerate(rows, start=1):
        name = compose_contact_name(contact_base_name(row, index), spec.contact_prefix, spec.contact_suffix)

        for phone_col in spec.columns:
            # One TEL line per card; embedded breaks would start new properties
            phone = LINE_BREAKS.sub(" ", str(row.get(phone_col, "")).strip())
            if not phone:
                continue

            cards.append(CRLF.join([
                "BEGIN:VCARD",
                "VERSION:3.0",
                f"FN:{escape_vcard_text(name)}",
                f"TEL;TYPE=CELL:{phone}",
                "END:VCARD",
            ]))

    if not cards:
        logger.warning("No phone values found; contact export is empty")

    content = CRLF.join(cards).encode("utf-8")
    logger.info(f"Encoded {len(cards)} contact cards from {len(rows)} rows")
    return ExportPayload(content=content, media_type="text/vcard; charset=utf-8", extension="vcf")


def contact_base_name(row: Mapping[str, str], index: int) -> str:
    """
    Pick the display name for a row.

    Args:
        row: Full source row; key order is header order
        index: 1-based position of the row in the filtered set

    Returns:
        The first name-like column's trimmed value, or ``Contact{index}``
    """
    name_col = find_name_header(row.keys())
    if name_col is not None:
        value = str(row.get(name_col, "")).strip()
        if value:
            return value
    return f"Contact{index}"


def compose_contact_name(base_name: str, prefix: str = "", suffix: str = "") -> str:
    """Join trimmed prefix, base name and trimmed suffix with single spaces."""
    parts = [(prefix or "").strip(), base_name, (suffix or "").strip()]
    return " ".join(part for part in parts if part)


def escape_vcard_text(value: str) -> str:
    """Escape a vCard text value (backslash, comma, semicolon, newline)."""
    return (
        value.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace(";", "\\;")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


ENCODERS: Dict[ExportFormat, Callable[[Sequence[Mapping[str, str]], ExportSpec], ExportPayload]] = {
    ExportFormat.CSV: export_csv,
    ExportFormat.XLSX: export_xlsx,
    ExportFormat.VCF: export_vcf,
}


def encode(rows: Sequence[Mapping[str, str]], spec: ExportSpec) -> ExportPayload:
    """Dispatch filtered rows to the encoder for the requested format."""
    return ENCODERS[spec.format](rows, spec)
