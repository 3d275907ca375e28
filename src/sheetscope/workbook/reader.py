"""
Dual-pass openpyxl reader: extracts formula cells and their cached values.

The first load (data_only=False) exposes formula text, the second
(data_only=True) exposes the values Excel cached the last time the file was
saved. Cells are visited row by row, sheet by sheet, in workbook order.
"""

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterator, Optional, Union
from zipfile import BadZipFile

import openpyxl
from openpyxl.cell.cell import Cell
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.formula import ArrayFormula

from ..engine.models import FormulaRecord
from ..errors import InputNotFoundError, InputUnreadableError

logger = logging.getLogger(__name__)

_LOAD_ERRORS = (InvalidFileException, BadZipFile, KeyError, OSError, ValueError)


def formula_text(value: Any) -> Optional[str]:
    """Return formula text without the leading "=", or None for non-formulas."""
    if isinstance(value, ArrayFormula):
        value = value.text
    if isinstance(value, str) and value.startswith("=") and len(value) > 1:
        return value[1:]
    return None


def cell_formula(cell: Cell) -> Optional[str]:
    """Formula text of a cell openpyxl typed as a formula, else None.

    Text cells that merely start with "=" (e.g. "=== Totals ===") are stored
    as strings and are not formulas.
    """
    if cell.data_type != "f":
        return None
    return formula_text(cell.value)


def display_value(value: Any) -> str:
    """Render a cached cell value as the string shown in reports."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


class WorkbookFormulaSource:
    """Enumerates the formula cells of an .xlsx/.xlsm workbook."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.is_file():
            raise InputNotFoundError(self.path)

    def _load(self, data_only: bool, read_only: bool = False) -> Workbook:
        try:
            return openpyxl.load_workbook(self.path, data_only=data_only, read_only=read_only)
        except _LOAD_ERRORS as e:
            raise InputUnreadableError(self.path, str(e)) from e

    def sheet_names(self) -> list[str]:
        """Worksheet titles in workbook order, without loading any cells."""
        workbook = self._load(data_only=False, read_only=True)
        try:
            return [worksheet.title for worksheet in workbook.worksheets]
        finally:
            workbook.close()

    def iter_records(self) -> Iterator[FormulaRecord]:
        """Yield one FormulaRecord per formula cell, in discovery order."""
        formula_wb = self._load(data_only=False)
        value_wb = self._load(data_only=True)

        try:
            for formula_ws in formula_wb.worksheets:
                sheet_name = formula_ws.title
                value_ws = value_wb[sheet_name] if sheet_name in value_wb.sheetnames else None
                sheet_total = 0

                for row in formula_ws.iter_rows():
                    for cell in row:
                        text = cell_formula(cell)
                        if text is None:
                            continue

                        cached = None
                        if value_ws is not None:
                            cached = value_ws.cell(row=cell.row, column=cell.column).value

                        sheet_total += 1
                        yield FormulaRecord(
                            sheet=sheet_name,
                            cell=cell.coordinate,
                            formula=text,
                            value=display_value(cached),
                            row=cell.row,
                            col=cell.column,
                        )

                if sheet_total:
                    logger.info(f"Sheet '{sheet_name}': {sheet_total} formulas")
                else:
                    logger.warning(f"Sheet '{sheet_name}' has no formulas")
        finally:
            formula_wb.close()
            value_wb.close()


def read_formula_records(path: Union[str, Path]) -> list[FormulaRecord]:
    """Read every formula cell of a workbook into a list."""
    return list(WorkbookFormulaSource(path).iter_records())
