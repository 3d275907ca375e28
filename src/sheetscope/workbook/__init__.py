"""Workbook cell source backed by openpyxl."""

from .reader import (
    WorkbookFormulaSource,
    cell_formula,
    display_value,
    formula_text,
    read_formula_records,
)

__all__ = [
    "WorkbookFormulaSource",
    "cell_formula",
    "display_value",
    "formula_text",
    "read_formula_records",
]
