"""
Tests for row filtering and column projection.
"""

import pytest

from sheet_export.core import FilterSpec, MatchMode, filter_rows, project_rows


class TestFilterRows:
    """Test suite for filter_rows function."""

    @pytest.fixture
    def rows(self):
        return [
            {"Name": "Ann Lee", "City": "Berlin", "Team": "Sales"},
            {"Name": "Bob", "City": "berlin", "Team": "IT"},
            {"Name": "Carl", "City": "Paris", "Team": "Sales Ops"},
            {"Name": "Dora", "City": "Lisbon", "Team": "Berlin Hub"},
        ]

    def test_empty_query_is_identity(self, rows):
        """Test that an empty query disables filtering."""
        spec = FilterSpec(columns=["City"], query="")
        assert filter_rows(rows, spec) == rows

    def test_no_columns_is_identity(self, rows):
        """Test that an empty column set disables filtering."""
        spec = FilterSpec(columns=[], query="Berlin")
        assert filter_rows(rows, spec) == rows

    def test_contains_case_insensitive(self, rows):
        spec = FilterSpec(columns=["City"], query="BERL")
        assert [r["Name"] for r in filter_rows(rows, spec)] == ["Ann Lee", "Bob"]

    def test_contains_case_sensitive(self, rows):
        spec = FilterSpec(columns=["City"], query="Berl", case_sensitive=True)
        assert [r["Name"] for r in filter_rows(rows, spec)] == ["Ann Lee"]

    def test_exact_match(self, rows):
        """Test exact mode requires the whole value to match."""
        spec = FilterSpec(columns=["Team"], query="sales", mode=MatchMode.EXACT)
        assert [r["Name"] for r in filter_rows(rows, spec)] == ["Ann Lee"]

    def test_exact_match_case_sensitive(self, rows):
        spec = FilterSpec(columns=["Team"], query="sales", mode=MatchMode.EXACT, case_sensitive=True)
        assert filter_rows(rows, spec) == []

    def test_any_column_may_match(self, rows):
        """Test that columns are combined with OR and input order is kept."""
        spec = FilterSpec(columns=["City", "Team"], query="berlin")
        assert [r["Name"] for r in filter_rows(rows, spec)] == ["Ann Lee", "Bob", "Dora"]

    def test_missing_cell_treated_as_empty(self):
        """Test that a missing key never raises."""
        rows = [{"Name": "Ann"}, {"Name": "Bob", "City": "Rome"}]
        spec = FilterSpec(columns=["City"], query="rome")
        assert filter_rows(rows, spec) == [{"Name": "Bob", "City": "Rome"}]

    def test_exact_empty_cell_not_matched_by_empty_query(self):
        """Test empty query short-circuits even in exact mode."""
        rows = [{"City": ""}, {"City": "Rome"}]
        spec = FilterSpec(columns=["City"], query="", mode=MatchMode.EXACT)
        assert filter_rows(rows, spec) == rows

    def test_idempotent(self, rows):
        """Test filtering an already filtered set changes nothing."""
        spec = FilterSpec(columns=["City", "Team"], query="sales")
        once = filter_rows(rows, spec)
        assert filter_rows(once, spec) == once

    def test_input_not_mutated(self, rows):
        snapshot = [dict(r) for r in rows]
        filter_rows(rows, FilterSpec(columns=["City"], query="paris"))
        assert rows == snapshot


class TestProjectRows:
    """Test suite for project_rows function."""

    def test_selects_and_orders_columns(self):
        rows = [{"A": "1", "B": "2", "C": "3"}]
        projected = project_rows(rows, ["C", "A"])

        assert projected == [{"C": "3", "A": "1"}]
        assert list(projected[0].keys()) == ["C", "A"]

    def test_missing_values_become_empty(self):
        rows = [{"A": "1"}, {"B": "2"}]
        assert project_rows(rows, ["A", "B"]) == [{"A": "1", "B": ""}, {"A": "", "B": "2"}]

    def test_never_contains_other_keys(self):
        rows = [{"A": "1", "B": "2", "C": "3"}, {"D": "4"}]
        for row in project_rows(rows, ["B"]):
            assert set(row) == {"B"}

    def test_empty_rows(self):
        assert project_rows([], ["A"]) == []
