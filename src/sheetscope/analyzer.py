"""End-to-end formula analysis of a workbook."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from .engine import AnalysisState, FormulaClassifier, FormulaRecord, aggregate
from .errors import EmptyCorpusError
from .reports import ReportPaths, ReportWriter
from .workbook import WorkbookFormulaSource

logger = logging.getLogger(__name__)


@dataclass
class AnalysisRun:
    """Outcome of analyzing one workbook."""

    source_path: Path
    state: AnalysisState
    reports: Optional[ReportPaths] = None


class FormulaAnalyzer:
    """
    Extracts, classifies and reports on every formula of a workbook.

    Each call builds its own aggregator, so one analyzer can be reused for
    any number of files without state leaking between runs.
    """

    def __init__(self, classifier: Optional[FormulaClassifier] = None):
        self.classifier = classifier or FormulaClassifier()

    def analyze_records(self, records: Iterable[FormulaRecord]) -> AnalysisState:
        """
        Classify a corpus of records.

        Raises:
            EmptyCorpusError: If the corpus holds no formulas
        """
        state = aggregate(records, self.classifier)
        if state.is_empty:
            raise EmptyCorpusError()

        logger.info(
            f"Total formulas extracted: {state.total} across {state.sheet_count} sheets, "
            f"{len(state.function_names)} unique functions"
        )
        return state

    def analyze_file(self, path: Union[str, Path]) -> AnalysisState:
        """Classify every formula of a workbook."""
        logger.info(f"Analyzing Excel file: {path}")
        source = WorkbookFormulaSource(path)
        sheets = source.sheet_names()
        logger.info(f"Found {len(sheets)} worksheets: {', '.join(sheets)}")
        try:
            return self.analyze_records(source.iter_records())
        except EmptyCorpusError:
            raise EmptyCorpusError(f"No formulas found in {source.path}") from None

    def run(
        self,
        path: Union[str, Path],
        output_dir: Optional[Union[str, Path]] = None,
    ) -> AnalysisRun:
        """Analyze a workbook and write its reports."""
        path = Path(path)
        state = self.analyze_file(path)
        reports = ReportWriter(output_dir).write(state, path.stem)
        return AnalysisRun(source_path=path, state=state, reports=reports)
