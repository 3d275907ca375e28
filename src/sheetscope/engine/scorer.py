"""Heuristic complexity scoring for formulas no pattern could decide."""

import re

from .models import Category, FormulaFeatures

# Function names: letters immediately followed by an opening parenthesis
FUNCTION_NAME_PATTERN = re.compile(r"[A-Za-z]+(?=\()")
# Function calls counted for scoring are uppercase only
FUNCTION_CALL_PATTERN = re.compile(r"[A-Z]+\(")
IF_CALL_PATTERN = re.compile(r"IF\(", re.IGNORECASE)

COMPLEX_FUNCTIONS = (
    "VLOOKUP",
    "INDEX",
    "MATCH",
    "SUMIF",
    "COUNTIF",
    "IFERROR",
    "SUBTOTAL",
)
LOGICAL_OPERATORS = ("AND", "OR")

# (exclusive lower bound, points); the first tier the value exceeds applies
FUNCTION_COUNT_TIERS = ((3, 3), (2, 2), (0, 1))
IF_COUNT_TIERS = ((2, 3), (1, 2), (0, 1))
LENGTH_TIERS = ((150, 3), (100, 2), (50, 1))
COMMA_COUNT_TIERS = ((5, 2), (3, 1))
CROSS_SHEET_POINTS = 1
COMPLEX_FUNCTION_POINTS = 1
LOGICAL_OPERATOR_POINTS = 1

COMPLEX_SCORE_THRESHOLD = 5
MEDIUM_SCORE_THRESHOLD = 2


def _tier_points(value: int, tiers: tuple[tuple[int, int], ...]) -> int:
    for lower_bound, points in tiers:
        if value > lower_bound:
            return points
    return 0


def extract_function_names(formula: str) -> list[str]:
    """Uppercase function names in order of appearance, duplicates kept."""
    return [name.upper() for name in FUNCTION_NAME_PATTERN.findall(formula)]


def extract_features(formula: str) -> FormulaFeatures:
    """Measure the structural features the scorer and the reports rely on."""
    upper = formula.upper()
    return FormulaFeatures(
        length=len(formula),
        function_count=len(FUNCTION_CALL_PATTERN.findall(formula)),
        if_count=len(IF_CALL_PATTERN.findall(formula)),
        comma_count=formula.count(","),
        cross_sheet="!" in formula,
        complex_functions=tuple(name for name in COMPLEX_FUNCTIONS if name in upper),
        logical_operators=tuple(op for op in LOGICAL_OPERATORS if f"{op}(" in upper),
        function_names=tuple(extract_function_names(formula)),
    )


def score_breakdown(features: FormulaFeatures) -> dict[str, int]:
    """Points contributed by each feature."""
    return {
        "function_count": _tier_points(features.function_count, FUNCTION_COUNT_TIERS),
        "if_count": _tier_points(features.if_count, IF_COUNT_TIERS),
        "cross_sheet": CROSS_SHEET_POINTS if features.cross_sheet else 0,
        "length": _tier_points(features.length, LENGTH_TIERS),
        "complex_functions": COMPLEX_FUNCTION_POINTS * len(features.complex_functions),
        "logical_operators": LOGICAL_OPERATOR_POINTS * len(features.logical_operators),
        "comma_count": _tier_points(features.comma_count, COMMA_COUNT_TIERS),
    }


def score_features(features: FormulaFeatures) -> int:
    return sum(score_breakdown(features).values())


def score_formula(formula: str) -> int:
    return score_features(extract_features(formula))


def category_for_score(score: int) -> Category:
    """Map a heuristic score onto a category."""
    if score >= COMPLEX_SCORE_THRESHOLD:
        return Category.COMPLEX
    if score >= MEDIUM_SCORE_THRESHOLD:
        return Category.MEDIUM
    return Category.SIMPLE
