"""Accumulates classification results for one analysis run."""

import logging
from typing import Iterable, Optional

from .classifier import FormulaClassifier
from .models import AnalysisState, Category, ClassificationResult, FormulaRecord

logger = logging.getLogger(__name__)


class FormulaAggregator:
    """
    Classifies records and groups them by category and by sheet.

    One aggregator belongs to one run. Snapshots are immutable copies, so
    adding more records never alters a snapshot already handed out.
    """

    def __init__(self, classifier: Optional[FormulaClassifier] = None):
        self.classifier = classifier or FormulaClassifier()
        self.reset()

    def reset(self):
        """Discard everything accumulated so far."""
        self._results: list[ClassificationResult] = []
        self._by_category: dict[Category, list[ClassificationResult]] = {
            category: [] for category in Category
        }
        self._by_sheet: dict[str, list[ClassificationResult]] = {}
        self._function_names: set[str] = set()

    def __len__(self) -> int:
        return len(self._results)

    def add(self, record: FormulaRecord) -> ClassificationResult:
        """Classify a record and accumulate it."""
        result = self.classifier.classify_record(record)
        self._results.append(result)
        self._by_category[result.category].append(result)
        self._by_sheet.setdefault(record.sheet, []).append(result)
        self._function_names.update(result.features.function_names)
        return result

    def extend(self, records: Iterable[FormulaRecord]) -> "FormulaAggregator":
        for record in records:
            self.add(record)
        return self

    def snapshot(self) -> AnalysisState:
        """Return an immutable view of the current totals."""
        return AnalysisState(
            results=tuple(self._results),
            by_category={
                category: tuple(results) for category, results in self._by_category.items()
            },
            by_sheet={sheet: tuple(results) for sheet, results in self._by_sheet.items()},
            function_names=tuple(sorted(self._function_names)),
        )


def aggregate(
    records: Iterable[FormulaRecord],
    classifier: Optional[FormulaClassifier] = None,
) -> AnalysisState:
    """Classify every record and return the resulting snapshot."""
    aggregator = FormulaAggregator(classifier).extend(records)
    state = aggregator.snapshot()
    logger.info(
        f"Categorized {state.total} formulas: "
        + ", ".join(f"{category.label} {count}" for category, count in state.counts.items())
    )
    return state
