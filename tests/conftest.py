"""Pytest configuration and shared fixtures."""

from pathlib import Path

import openpyxl
import pytest

from sheetscope.engine import AnalysisState, FormulaRecord, aggregate


@pytest.fixture
def make_record():
    """Factory for FormulaRecord instances."""

    def _make(formula: str, sheet: str = "Sheet1", cell: str = "A1", value: str = "") -> FormulaRecord:
        return FormulaRecord(sheet=sheet, cell=cell, formula=formula, value=value)

    return _make


@pytest.fixture
def sample_records() -> list[FormulaRecord]:
    """Six formulas over two sheets: 3 simple, 2 medium, 1 complex."""
    return [
        FormulaRecord(sheet="Inputs", cell="B2", formula="A1", value="10"),
        FormulaRecord(sheet="Inputs", cell="B3", formula="A1+B1", value="20"),
        FormulaRecord(sheet="Calc", cell="C2", formula="VLOOKUP(A1,Table,2,FALSE)", value="x"),
        FormulaRecord(sheet="Calc", cell="C3", formula="SUMPRODUCT(A1:A5,B1:B5)", value="55"),
        FormulaRecord(sheet="Inputs", cell="B4", formula="SUM(A1:A5)", value="15"),
        FormulaRecord(sheet="Calc", cell="C4", formula='IF(A1>0,"yes","no")', value="yes"),
    ]


@pytest.fixture
def sample_state(sample_records) -> AnalysisState:
    return aggregate(sample_records)


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    """Create a small workbook with formulas on two of its three sheets."""
    path = tmp_path / "model.xlsx"

    wb = openpyxl.Workbook()
    inputs = wb.active
    inputs.title = "Inputs"
    inputs["A1"] = 10
    inputs["A2"] = 20
    inputs["B1"] = "=A1*2"
    inputs["B2"] = "=SUM(A1:A2)"

    calc = wb.create_sheet("Calc")
    calc["A1"] = "=Inputs!B2+1"
    calc["B1"] = "plain text"
    calc["C1"] = '=IF(AND(A1>0,B1<10),VLOOKUP(A1,T,2,0),IF(A1=0,0,-1))'

    notes = wb.create_sheet("Notes")
    notes["A1"] = "no formulas here"

    wb.save(path)
    return path


@pytest.fixture
def empty_workbook_path(tmp_path: Path) -> Path:
    """Create a workbook that holds values but no formulas."""
    path = tmp_path / "values_only.xlsx"
    wb = openpyxl.Workbook()
    wb.active["A1"] = "just a value"
    wb.save(path)
    return path
