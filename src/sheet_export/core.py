"""
Row filtering and column projection.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Sequence

from .io_utils import Row

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    CONTAINS = "contains"
    EXACT = "exact"


@dataclass(frozen=True)
class FilterSpec:
    columns: List[str] = field(default_factory=list)
    query: str = ""
    mode: MatchMode = MatchMode.CONTAINS
    case_sensitive: bool = False

    @property
    def is_active(self) -> bool:
        """Filtering is opt-in: it needs both columns and a query."""
        return bool(self.columns) and self.query != ""


def filter_rows(rows: Sequence[Mapping[str, str]], spec: FilterSpec) -> List[Row]:
    """
    Keep the rows where at least one of the filter columns matches the query.

    Args:
        rows: Source rows
        spec: Columns, query, match mode and case sensitivity

    Returns:
        Matching rows in their original order; all rows when the spec is inactive
    """
    if not spec.is_active:
        return list(rows)

    query = spec.query if spec.case_sensitive else spec.query.lower()

    def matches(row: Mapping[str, str]) -> bool:
        for column in spec.columns:
            value = str(row.get(column, ""))
            if not spec.case_sensitive:
                value = value.lower()

            if spec.mode == MatchMode.EXACT:
                if value == query:
                    return True
            elif query in value:
                return True
        return False

    filtered = [row for row in rows if matches(row)]
    logger.debug(f"Filter {spec.mode.value} '{spec.query}' on {spec.columns}: {len(filtered)}/{len(rows)} rows")
    return filtered


def project_rows(rows: Sequence[Mapping[str, str]], columns: Sequence[str]) -> List[Row]:
    """
    Build new rows holding exactly the given columns, in that order.

    Args:
        rows: Source rows
        columns: Columns to keep

    Returns:
        Projected rows; columns missing from a source row are filled with ""
    """
    return [{column: row.get(column, "") for column in columns} for row in rows]
