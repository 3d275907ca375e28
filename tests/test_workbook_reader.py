"""Tests for the openpyxl workbook reader."""

import logging
from datetime import date, datetime

import openpyxl
import pytest
from openpyxl.worksheet.formula import ArrayFormula

from sheetscope.errors import InputNotFoundError, InputUnreadableError
from sheetscope.workbook import WorkbookFormulaSource, read_formula_records
from sheetscope.workbook.reader import cell_formula, display_value, formula_text


class TestFormulaText:
    """Test detection of formula cells."""

    def test_strips_leading_equals(self):
        assert formula_text("=SUM(A1:A2)") == "SUM(A1:A2)"

    def test_non_formula_values(self):
        assert formula_text("plain text") is None
        assert formula_text(42) is None
        assert formula_text(None) is None

    def test_bare_equals_is_not_a_formula(self):
        assert formula_text("=") is None

    def test_array_formula(self):
        value = ArrayFormula("A1:A2", "=SUM(B1:B2*C1:C2)")

        assert formula_text(value) == "SUM(B1:B2*C1:C2)"


class TestCellFormula:
    """Test that only cells typed as formulas are picked up."""

    def test_formula_cell(self):
        ws = openpyxl.Workbook().active
        ws["A1"] = "=SUM(B1:B2)"

        assert cell_formula(ws["A1"]) == "SUM(B1:B2)"

    def test_text_starting_with_equals(self):
        ws = openpyxl.Workbook().active
        ws["A1"] = "=== Totals ==="
        ws["A1"].data_type = "s"

        assert cell_formula(ws["A1"]) is None

    def test_array_formula_cell(self):
        ws = openpyxl.Workbook().active
        ws["A1"] = ArrayFormula("A1:A1", "=SUM(B1:B2*C1:C2)")

        assert cell_formula(ws["A1"]) == "SUM(B1:B2*C1:C2)"

    def test_value_cells(self):
        ws = openpyxl.Workbook().active
        ws["A1"] = 42
        ws["A2"] = "plain text"

        assert cell_formula(ws["A1"]) is None
        assert cell_formula(ws["A2"]) is None


class TestDisplayValue:
    """Test rendering of cached values."""

    def test_missing_value_is_empty(self):
        assert display_value(None) == ""

    def test_booleans(self):
        assert display_value(True) == "TRUE"
        assert display_value(False) == "FALSE"

    def test_dates(self):
        assert display_value(date(2024, 3, 1)) == "2024-03-01"
        assert display_value(datetime(2024, 3, 1, 12, 30)) == "2024-03-01T12:30:00"

    def test_numbers_and_text(self):
        assert display_value(42) == "42"
        assert display_value(1.5) == "1.5"
        assert display_value("#N/A") == "#N/A"


class TestWorkbookFormulaSource:
    """Test reading formula records from a saved workbook."""

    def test_records_in_discovery_order(self, workbook_path):
        records = read_formula_records(workbook_path)

        assert [(r.sheet, r.cell) for r in records] == [
            ("Inputs", "B1"),
            ("Inputs", "B2"),
            ("Calc", "A1"),
            ("Calc", "C1"),
        ]

    def test_formula_text_has_no_leading_equals(self, workbook_path):
        records = read_formula_records(workbook_path)

        assert [r.formula for r in records] == [
            "A1*2",
            "SUM(A1:A2)",
            "Inputs!B2+1",
            "IF(AND(A1>0,B1<10),VLOOKUP(A1,T,2,0),IF(A1=0,0,-1))",
        ]

    def test_uncalculated_values_are_empty(self, workbook_path):
        """openpyxl never calculates, so freshly written formulas have no cached value."""
        records = read_formula_records(workbook_path)

        assert all(r.value == "" for r in records)

    def test_records_carry_coordinates(self, workbook_path):
        record = read_formula_records(workbook_path)[3]

        assert record.row == 1
        assert record.col == 3
        assert record.address == "Calc!C1"

    def test_sheet_names(self, workbook_path):
        assert WorkbookFormulaSource(workbook_path).sheet_names() == ["Inputs", "Calc", "Notes"]

    def test_sheet_without_formulas_logs_warning(self, workbook_path, caplog):
        with caplog.at_level(logging.WARNING, logger="sheetscope.workbook.reader"):
            read_formula_records(workbook_path)

        assert "Sheet 'Notes' has no formulas" in caplog.text

    def test_text_cells_starting_with_equals_are_skipped(self, tmp_path):
        """A heading such as "=== Totals ===" saved as text is not a formula."""
        path = tmp_path / "headings.xlsx"
        wb = openpyxl.Workbook()
        ws = wb.active
        ws["A1"] = "=== Totals ==="
        ws["A1"].data_type = "s"
        ws["B1"] = "=SUM(C1:C2)"
        wb.save(path)

        records = read_formula_records(path)

        assert [r.cell for r in records] == ["B1"]
        assert records[0].formula == "SUM(C1:C2)"

    def test_workbook_without_formulas(self, empty_workbook_path):
        assert read_formula_records(empty_workbook_path) == []

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.xlsx"

        with pytest.raises(InputNotFoundError) as exc_info:
            WorkbookFormulaSource(path)

        assert exc_info.value.path == path
        assert "File not found" in str(exc_info.value)

    def test_directory_is_not_a_workbook(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            WorkbookFormulaSource(tmp_path)

    def test_corrupt_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"this is not a zip archive")

        with pytest.raises(InputUnreadableError):
            read_formula_records(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("a,b\n1,2\n")

        with pytest.raises(InputUnreadableError):
            read_formula_records(path)
