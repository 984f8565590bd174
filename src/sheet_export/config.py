"""Configuration management for Sheet Export."""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Input documents are gated on these before any parsing happens
SUPPORTED_EXTENSIONS = (".xlsx", ".xls")


class Settings(BaseModel):
    """Application settings."""

    # Number of filtered rows returned by a preview request
    preview_limit: int = Field(
        default=int(os.getenv("SHEET_EXPORT_PREVIEW_LIMIT", "10")),
        gt=0,
        validate_default=True
    )

    # Appended to the source file's base name when naming an export
    export_suffix: str = os.getenv("SHEET_EXPORT_SUFFIX", "_export")

    # Sheet title used by the workbook exporter
    export_sheet_name: str = os.getenv("SHEET_EXPORT_SHEET_NAME", "Export")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
