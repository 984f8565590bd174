"""
Shared fixtures: in-memory workbooks built with openpyxl, and legacy
single-sheet .xls streams packed by hand.
"""

import io
import struct

import openpyxl
import pytest


def make_workbook_bytes(rows, title="Contacts", extra_sheets=None) -> bytes:
    """Build an .xlsx document whose first sheet holds ``rows``."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title

    for row in rows:
        ws.append(row)

    for name, sheet_rows in (extra_sheets or {}).items():
        extra = wb.create_sheet(name)
        for row in sheet_rows:
            extra.append(row)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _biff_record(record_id: int, data: bytes) -> bytes:
    return struct.pack("<HH", record_id, len(data)) + data


def make_xls_bytes(rows) -> bytes:
    """
    Build a BIFF4 worksheet stream (Excel 4.0 .xls) holding ``rows``.

    Strings become LABEL records and numbers NUMBER records; ``None`` and
    empty strings leave the cell out.
    """
    # BOF: BIFF4, worksheet stream
    stream = [_biff_record(0x0409, struct.pack("<HHH", 0, 0x0010, 0))]
    # CODEPAGE: Windows-1252
    stream.append(_biff_record(0x0042, struct.pack("<H", 1252)))

    for rowx, row in enumerate(rows):
        for colx, value in enumerate(row):
            if value is None or value == "":
                continue
            if isinstance(value, str):
                text = value.encode("cp1252")
                data = struct.pack("<HHHH", rowx, colx, 0, len(text)) + text
                stream.append(_biff_record(0x0204, data))
            else:
                stream.append(_biff_record(0x0203, struct.pack("<HHHd", rowx, colx, 0, float(value))))

    stream.append(_biff_record(0x000A, b""))
    return b"".join(stream)


@pytest.fixture
def workbook_bytes():
    """Factory fixture for building workbook bytes."""
    return make_workbook_bytes


@pytest.fixture
def xls_bytes():
    """Factory fixture for building legacy .xls bytes."""
    return make_xls_bytes


@pytest.fixture
def contacts_rows():
    return [
        ["Name", "Phone", "Mobile", "City"],
        ["Ann", "555-1", "", "Berlin"],
        ["", "555-2", "777-2", "berlin"],
        ["Carl", "", "", "Paris"],
        ["Dora", "555-4", "777-4", "Lisbon"],
    ]


@pytest.fixture
def contacts_xlsx(contacts_rows):
    return make_workbook_bytes(contacts_rows)
