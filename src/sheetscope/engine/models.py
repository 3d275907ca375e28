"""Data models for formula classification."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import EmptyCorpusError


class Category(str, Enum):
    """Complexity category assigned to a formula."""

    SIMPLE = "SIMPLE"
    MEDIUM = "MEDIUM"
    COMPLEX = "COMPLEX"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class FormulaRecord(BaseModel):
    """A single formula cell extracted from a workbook."""

    model_config = ConfigDict(frozen=True)

    sheet: str
    cell: str  # A1 notation, e.g., "B12"
    formula: str  # Formula text without the leading "="
    value: str = ""  # Cached display value, "" when absent
    row: Optional[int] = None
    col: Optional[int] = None

    @property
    def address(self) -> str:
        return f"{self.sheet}!{self.cell}"

    def to_dict(self) -> dict:
        return {
            "sheet": self.sheet,
            "cell": self.cell,
            "formula": self.formula,
            "value": self.value,
        }


class FormulaFeatures(BaseModel):
    """Structural measurements of a formula, computed once per formula."""

    model_config = ConfigDict(frozen=True)

    length: int
    function_count: int
    if_count: int
    comma_count: int
    cross_sheet: bool
    complex_functions: tuple[str, ...] = ()
    logical_operators: tuple[str, ...] = ()
    function_names: tuple[str, ...] = ()  # Uppercase, in order of appearance


class ClassificationResult(BaseModel):
    """Category assigned to a record, with the evidence behind it."""

    model_config = ConfigDict(frozen=True)

    record: FormulaRecord
    category: Category
    features: FormulaFeatures
    rule: Optional[str] = None  # Name of the deciding pattern
    score: Optional[int] = None  # Heuristic score when no pattern decided

    @property
    def decided_by_pattern(self) -> bool:
        return self.rule is not None

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["category"] = self.category.value
        return data


def _empty_categories() -> dict[Category, tuple[ClassificationResult, ...]]:
    return {category: () for category in Category}


class AnalysisState(BaseModel):
    """Immutable snapshot of one analysis run."""

    model_config = ConfigDict(frozen=True)

    results: tuple[ClassificationResult, ...] = ()
    by_category: dict[Category, tuple[ClassificationResult, ...]] = Field(
        default_factory=_empty_categories
    )
    by_sheet: dict[str, tuple[ClassificationResult, ...]] = Field(default_factory=dict)
    function_names: tuple[str, ...] = ()  # Sorted, distinct

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def is_empty(self) -> bool:
        return not self.results

    @property
    def sheet_count(self) -> int:
        return len(self.by_sheet)

    @property
    def counts(self) -> dict[Category, int]:
        return {category: self.count(category) for category in Category}

    def count(self, category: Category) -> int:
        return len(self.by_category.get(category, ()))

    def percentage(self, category: Category) -> float:
        """Share of the corpus in a category, as a percentage."""
        if self.is_empty:
            raise EmptyCorpusError("Cannot compute percentages for an empty corpus")
        return self.count(category) / self.total * 100

    def sheet_counts(self, sheet: str) -> dict[Category, int]:
        """Per-category counts for a single sheet."""
        counts = {category: 0 for category in Category}
        for result in self.by_sheet.get(sheet, ()):
            counts[result.category] += 1
        return counts

    def sheets_by_size(self) -> list[tuple[str, tuple[ClassificationResult, ...]]]:
        """Sheets ordered by formula count, largest first; ties keep discovery order."""
        return sorted(self.by_sheet.items(), key=lambda item: len(item[1]), reverse=True)
