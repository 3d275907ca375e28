"""Configuration management for SheetScope."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Application settings."""

    # Report output
    export_dir: Path = Path(os.getenv("SHEETSCOPE_EXPORT_DIR", "export"))
    json_report_name: str = os.getenv("SHEETSCOPE_JSON_REPORT", "formula_analysis.json")
    csv_report_name: str = os.getenv("SHEETSCOPE_CSV_REPORT", "formulas.csv")
    markdown_report_name: str = os.getenv("SHEETSCOPE_MARKDOWN_REPORT", "analysis_report.md")

    # Logging
    log_level: str = os.getenv("SHEETSCOPE_LOG_LEVEL", "INFO").upper()

    # Report sizing - how many formulas to show per section
    sample_limit: int = int(os.getenv("SHEETSCOPE_SAMPLE_LIMIT", "5"))
    medium_inventory_limit: int = int(os.getenv("SHEETSCOPE_MEDIUM_INVENTORY_LIMIT", "20"))
    complex_inventory_limit: int = int(os.getenv("SHEETSCOPE_COMPLEX_INVENTORY_LIMIT", "15"))
    formula_preview_chars: int = int(os.getenv("SHEETSCOPE_FORMULA_PREVIEW_CHARS", "80"))


settings = Settings()
