"""
Error taxonomy for the sheet export pipeline.

Every failure the pipeline reports carries a stable ``kind`` token, an
HTTP-style ``status_code`` and a human-readable message. Callers at the
transport edge can serialize any of them with ``to_dict()``.
"""

from typing import Any, Dict, List


class SheetExportError(Exception):
    """Base class for all pipeline errors."""

    kind = "SheetExportError"
    status_code = 500
    default_message = "Sheet export failed."

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "error": self.message}


# ----- Input shape (client errors, raised before parsing) -----

class InvalidInputTypeError(SheetExportError):
    kind = "InvalidInputType"
    status_code = 400
    default_message = "Invalid file type. Only .xlsx and .xls files are supported."


class InvalidParametersError(SheetExportError):
    kind = "InvalidParameters"
    status_code = 400
    default_message = "Invalid column selection data."


class MissingExportColumnsError(SheetExportError):
    kind = "MissingExportColumns"
    status_code = 400
    default_message = "No export columns selected."


class InvalidFormatError(SheetExportError):
    kind = "InvalidFormat"
    status_code = 400
    default_message = "Invalid export format."


# ----- Document content (raised by the loader) -----

class LoadError(SheetExportError):
    """A document was uploaded but its content cannot be used."""

    status_code = 422


class UnreadableDocumentError(LoadError):
    kind = "UnreadableDocument"
    default_message = "Could not parse the file. The file may be corrupted or in an unsupported format."


class NoSheetsError(LoadError):
    kind = "NoSheets"
    default_message = "The file contains no sheets."


class EmptyDataError(LoadError):
    kind = "EmptyData"
    default_message = "The sheet appears to be empty or has no data rows."


class NoHeadersError(LoadError):
    kind = "NoHeaders"
    default_message = "No column headers could be detected."


# ----- Request against loaded content -----

class UnknownColumnError(SheetExportError):
    """One or more requested columns are not in the document's header set."""

    kind = "UnknownColumn"
    status_code = 400

    def __init__(self, role: str, columns: List[str]):
        self.role = role
        self.columns = list(columns)
        super().__init__(
            f"{role.capitalize()} column(s) not found in file: {', '.join(self.columns)}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["columns"] = self.columns
        return data


class NoMatchesError(SheetExportError):
    kind = "NoMatches"
    status_code = 422
    default_message = "No rows matched the filter criteria."


# ----- Server side -----

class EncodingFailureError(SheetExportError):
    kind = "EncodingFailure"
    status_code = 500
    default_message = "Failed to generate export output."


class UnexpectedError(SheetExportError):
    kind = "Unexpected"
    status_code = 500
    default_message = "An unexpected error occurred during processing."
