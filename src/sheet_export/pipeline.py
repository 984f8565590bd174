"""
Request orchestration: validate, load, filter, then preview or export.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .config import SUPPORTED_EXTENSIONS, get_settings
from .core import FilterSpec, MatchMode, filter_rows, project_rows
from .detect import detect_phone_headers
from .errors import (
    InvalidFormatError,
    InvalidInputTypeError,
    InvalidParametersError,
    MissingExportColumnsError,
    NoMatchesError,
    SheetExportError,
    UnexpectedError,
    UnknownColumnError,
)
from .exporters import ExportFormat, ExportSpec, encode
from .io_utils import Row, Table, export_filename, has_supported_extension, load_table

logger = logging.getLogger(__name__)

ColumnParam = Union[None, str, List[str]]


@dataclass(frozen=True)
class ProcessRequest:
    filter_spec: FilterSpec
    export_spec: ExportSpec
    preview_only: bool = False


@dataclass(frozen=True)
class PreviewResult:
    rows: List[Row] = field(default_factory=list)
    total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"rows": self.rows, "total": self.total}


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    media_type: str
    filename: str

    def to_dict(self) -> Dict[str, Any]:
        return {"media_type": self.media_type, "filename": self.filename, "size": len(self.content)}


def check_input_file(data: Optional[bytes], filename: Optional[str]) -> None:
    """
    Reject a missing upload or an unsupported extension before any parsing.

    Raises:
        InvalidInputTypeError: If the blob is missing or the name is not .xlsx/.xls
    """
    if data is None:
        raise InvalidInputTypeError("No file provided.")

    if not has_supported_extension(filename or "", SUPPORTED_EXTENSIONS):
        raise InvalidInputTypeError()


def parse_column_list(value: ColumnParam, field_name: str) -> List[str]:
    """
    Normalize a column-list parameter.

    Accepts a list of strings or its JSON encoding (the form-field shape);
    None and empty text mean no columns. Duplicates collapse to the first
    occurrence.

    Raises:
        InvalidParametersError: If the value is not a list of strings
    """
    if value is None:
        return []

    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except ValueError as e:
            raise InvalidParametersError(f"Invalid column selection data for {field_name}.") from e

    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise InvalidParametersError(f"Invalid column selection data for {field_name}.")

    columns: List[str] = []
    for item in value:
        if item not in columns:
            columns.append(item)
    return columns


def _as_bool(value: Union[bool, str, None]) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def build_request(
    filter_columns: ColumnParam = None,
    filter_value: Optional[str] = "",
    match_type: Optional[str] = "contains",
    case_sensitive: Union[bool, str, None] = False,
    export_columns: ColumnParam = None,
    export_format: Optional[str] = "csv",
    contact_prefix: Optional[str] = "",
    contact_suffix: Optional[str] = "",
    preview_only: Union[bool, str, None] = False
) -> ProcessRequest:
    """
    Validate request parameters in order and build the filter/export specs.

    Raises:
        InvalidParametersError: If a column list or the match mode is malformed
        MissingExportColumnsError: If a real export names no columns
        InvalidFormatError: If the export format is not csv, xlsx or vcf
    """
    filter_cols = parse_column_list(filter_columns, "filter columns")
    export_cols = parse_column_list(export_columns, "export columns")

    try:
        mode = MatchMode(match_type or MatchMode.CONTAINS.value)
    except ValueError as e:
        raise InvalidParametersError(f"Invalid match type: {match_type}") from e

    preview = _as_bool(preview_only)

    if not preview and not export_cols:
        raise MissingExportColumnsError()

    try:
        fmt = ExportFormat(export_format or ExportFormat.CSV.value)
    except ValueError as e:
        raise InvalidFormatError() from e

    return ProcessRequest(
        filter_spec=FilterSpec(
            columns=filter_cols,
            query=filter_value or "",
            mode=mode,
            case_sensitive=_as_bool(case_sensitive)
        ),
        export_spec=ExportSpec(
            columns=export_cols,
            format=fmt,
            contact_prefix=contact_prefix or "",
            contact_suffix=contact_suffix or ""
        ),
        preview_only=preview
    )


def discover_headers(data: Optional[bytes], filename: Optional[str]) -> List[str]:
    """
    Return the header names of an uploaded document's first sheet.

    Raises:
        InvalidInputTypeError: For a missing blob or unsupported extension
        LoadError: For any document content problem
        UnexpectedError: For anything else
    """
    check_input_file(data, filename)
    try:
        table = load_table(data)
    except SheetExportError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected failure reading headers from '{filename}'")
        raise UnexpectedError("An unexpected error occurred while reading the file.") from e

    logger.info(f"Discovered {len(table.headers)} headers in '{filename}'")
    return table.headers


def validate_columns(table: Table, request: ProcessRequest) -> None:
    """
    Check filter columns, then export columns, against the header set.

    Raises:
        UnknownColumnError: Listing every offending column of the first failing check
    """
    known = set(table.headers)

    invalid_filter = [c for c in request.filter_spec.columns if c not in known]
    if invalid_filter:
        raise UnknownColumnError("filter", invalid_filter)

    invalid_export = [c for c in request.export_spec.columns if c not in known]
    if invalid_export:
        raise UnknownColumnError("export", invalid_export)


def run(
    data: bytes,
    filename: str,
    request: ProcessRequest,
    preview_limit: Optional[int] = None
) -> Union[PreviewResult, ExportResult]:
    """
    Run a validated request through load, filter and preview or export.
    """
    settings = get_settings()
    limit = settings.preview_limit if preview_limit is None else preview_limit
    if request.preview_only and limit < 1:
        raise InvalidParametersError("Preview limit must be at least 1.")

    table = load_table(data, allow_empty=request.preview_only)

    if not table.rows:
        # Only reachable in preview mode; a strict load raises instead
        logger.info(f"Preview of '{filename}': sheet has no data rows")
        return PreviewResult(rows=[], total=0)

    validate_columns(table, request)

    filtered = filter_rows(table.rows, request.filter_spec)
    logger.info(f"{len(filtered)} of {len(table.rows)} rows matched the filter")

    if request.preview_only:
        columns = request.export_spec.columns or table.headers
        return PreviewResult(rows=project_rows(filtered[:limit], columns), total=len(filtered))

    if not filtered:
        raise NoMatchesError()

    spec = request.export_spec
    if spec.format == ExportFormat.VCF and not detect_phone_headers(spec.columns):
        logger.warning(
            f"None of the selected columns look like phone numbers: {', '.join(spec.columns)}. "
            f"Detected phone columns: {', '.join(detect_phone_headers(table.headers)) or 'none'}"
        )

    payload = encode(filtered, spec)
    name = export_filename(filename, settings.export_suffix, payload.extension)
    logger.info(f"Exported '{name}' ({spec.format.value}, {len(payload.content)} bytes)")

    return ExportResult(content=payload.content, media_type=payload.media_type, filename=name)


def process(
    data: Optional[bytes],
    filename: Optional[str],
    filter_columns: ColumnParam = None,
    filter_value: Optional[str] = "",
    match_type: Optional[str] = "contains",
    case_sensitive: Union[bool, str, None] = False,
    export_columns: ColumnParam = None,
    export_format: Optional[str] = "csv",
    contact_prefix: Optional[str] = "",
    contact_suffix: Optional[str] = "",
    preview_only: Union[bool, str, None] = False,
    preview_limit: Optional[int] = None
) -> Union[PreviewResult, ExportResult]:
    """
    Process an uploaded document into a preview or an export payload.

    Validation runs in a fixed order and the first failure wins: file type,
    parameter shape, export columns, format, document content, column names.

    Args:
        data: Raw document bytes
        filename: Declared name of the uploaded file
        filter_columns: Columns tested by the filter (list or JSON list)
        filter_value: Text to match; empty disables filtering
        match_type: 'contains' or 'exact'
        case_sensitive: Compare verbatim instead of lower-cased
        export_columns: Columns to export, in order (list or JSON list)
        export_format: 'csv', 'xlsx' or 'vcf'
        contact_prefix: Text placed before each contact name
        contact_suffix: Text placed after each contact name
        preview_only: Return the first rows instead of a payload
        preview_limit: Override the configured preview row count

    Returns:
        PreviewResult for previews, ExportResult otherwise

    Raises:
        SheetExportError: The specific taxonomy error; anything unanticipated
            is logged and raised as UnexpectedError
    """
    try:
        check_input_file(data, filename)

        request = build_request(
            filter_columns=filter_columns,
            filter_value=filter_value,
            match_type=match_type,
            case_sensitive=case_sensitive,
            export_columns=export_columns,
            export_format=export_format,
            contact_prefix=contact_prefix,
            contact_suffix=contact_suffix,
            preview_only=preview_only
        )

        return run(data, filename, request, preview_limit=preview_limit)

    except SheetExportError as e:
        logger.info(f"Request for '{filename}' rejected: {e.kind}: {e.message}")
        raise
    except Exception as e:
        logger.exception(f"Unexpected failure processing '{filename}'")
        raise UnexpectedError() from e
