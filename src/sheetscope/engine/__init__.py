"""Formula classification engine."""

from .models import (
    AnalysisState,
    Category,
    ClassificationResult,
    FormulaFeatures,
    FormulaRecord,
)
from .patterns import (
    COMPLEX_PATTERNS,
    SIMPLE_PATTERNS,
    FormulaPattern,
    PatternLibrary,
    classify_by_pattern,
    match_pattern,
)
from .scorer import (
    category_for_score,
    extract_features,
    extract_function_names,
    score_breakdown,
    score_features,
    score_formula,
)
from .classifier import FormulaClassifier, classify
from .aggregator import FormulaAggregator, aggregate

__all__ = [
    "AnalysisState",
    "Category",
    "ClassificationResult",
    "FormulaFeatures",
    "FormulaRecord",
    "COMPLEX_PATTERNS",
    "SIMPLE_PATTERNS",
    "FormulaPattern",
    "PatternLibrary",
    "classify_by_pattern",
    "match_pattern",
    "category_for_score",
    "extract_features",
    "extract_function_names",
    "score_breakdown",
    "score_features",
    "score_formula",
    "FormulaClassifier",
    "classify",
    "FormulaAggregator",
    "aggregate",
]
