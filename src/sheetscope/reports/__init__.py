"""Report emitters and the report writer."""

from .console import render_console_summary
from .csv_report import CSV_COLUMNS, render_csv
from .functions import categorize_functions, function_impact, function_usage
from .json_report import build_json_document, render_json
from .markdown import MarkdownReportBuilder, render_markdown
from .migration import MigrationPhase, MigrationPlan, build_migration_plan
from .writer import ReportPaths, ReportWriter

__all__ = [
    "render_console_summary",
    "CSV_COLUMNS",
    "render_csv",
    "categorize_functions",
    "function_impact",
    "function_usage",
    "build_json_document",
    "render_json",
    "MarkdownReportBuilder",
    "render_markdown",
    "MigrationPhase",
    "MigrationPlan",
    "build_migration_plan",
    "ReportPaths",
    "ReportWriter",
]
