"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from sheet_export.config import Settings


class TestSettings:
    """Test suite for Settings model."""

    def test_defaults(self):
        settings = Settings()

        assert settings.preview_limit > 0
        assert settings.export_suffix
        assert settings.export_sheet_name

    def test_explicit_preview_limit(self):
        assert Settings(preview_limit=25).preview_limit == 25

    @pytest.mark.parametrize("limit", [0, -1])
    def test_preview_limit_must_be_positive(self, limit):
        with pytest.raises(ValidationError):
            Settings(preview_limit=limit)
