"""Tests for the end-to-end analyzer."""

import logging

import pytest

from sheetscope.analyzer import FormulaAnalyzer
from sheetscope.engine import Category
from sheetscope.errors import EmptyCorpusError, InputNotFoundError


class TestFormulaAnalyzer:
    """Test analysis of records and workbooks."""

    def test_analyze_records(self, sample_records):
        state = FormulaAnalyzer().analyze_records(sample_records)

        assert state.total == 6
        assert state.count(Category.COMPLEX) == 1

    def test_analyze_records_empty(self):
        with pytest.raises(EmptyCorpusError):
            FormulaAnalyzer().analyze_records([])

    def test_analyze_file(self, workbook_path):
        state = FormulaAnalyzer().analyze_file(workbook_path)

        assert state.total == 4
        assert list(state.by_sheet) == ["Inputs", "Calc"]
        assert state.function_names == ("AND", "IF", "SUM", "VLOOKUP")

    def test_logs_sheet_names(self, workbook_path, caplog):
        with caplog.at_level(logging.INFO, logger="sheetscope.analyzer"):
            FormulaAnalyzer().analyze_file(workbook_path)

        assert "Found 3 worksheets: Inputs, Calc, Notes" in caplog.text

    def test_workbook_categories(self, workbook_path):
        state = FormulaAnalyzer().analyze_file(workbook_path)
        categories = {r.record.address: r.category for r in state.results}

        assert categories["Calc!C1"] == Category.COMPLEX
        assert categories["Inputs!B2"] == Category.SIMPLE

    def test_analyze_file_without_formulas(self, empty_workbook_path):
        with pytest.raises(EmptyCorpusError) as exc_info:
            FormulaAnalyzer().analyze_file(empty_workbook_path)

        assert "values_only.xlsx" in str(exc_info.value)

    def test_analyze_missing_file(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            FormulaAnalyzer().analyze_file(tmp_path / "missing.xlsx")

    def test_run_writes_reports(self, workbook_path, tmp_path):
        output_dir = tmp_path / "out"

        run = FormulaAnalyzer().run(workbook_path, output_dir)

        assert run.source_path == workbook_path
        assert run.state.total == 4
        assert all(path.parent == output_dir for path in run.reports.as_list())
        assert "**File**: model" in run.reports.markdown_path.read_text(encoding="utf-8")

    def test_runs_are_independent(self, workbook_path, tmp_path):
        analyzer = FormulaAnalyzer()

        first = analyzer.run(workbook_path, tmp_path / "one")
        second = analyzer.run(workbook_path, tmp_path / "two")

        assert first.state.total == second.state.total == 4
