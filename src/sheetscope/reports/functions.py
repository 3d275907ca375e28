"""Function usage statistics and catalog groupings for reports."""

from ..engine.models import AnalysisState

HIGH_IMPACT_FUNCTIONS = {"VLOOKUP", "INDEX", "MATCH", "SUMPRODUCT", "IFERROR"}
MEDIUM_IMPACT_FUNCTIONS = {"IF", "AND", "OR", "SUMIF", "COUNTIF"}

# Categories overlap on purpose (LEFT is both basic and text processing)
FUNCTION_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Basic Functions": ("SUM", "MAX", "MIN", "ROUND", "LEN", "LEFT", "MID", "TRIM"),
    "Conditional Logic": ("IF", "AND", "OR", "IFERROR", "ISBLANK"),
    "Lookup & Reference": ("VLOOKUP", "INDEX", "MATCH", "SEARCH"),
    "Aggregation": ("SUMIF", "COUNTIF", "SUBTOTAL", "SUMPRODUCT"),
    "Text Processing": ("CONCATENATE", "LEFT", "MID", "TRIM", "SEARCH", "LEN"),
    "Mathematical": ("EXP", "LN", "ROUND"),
}
OTHER_CATEGORY = "Other"


def function_impact(name: str) -> str:
    if name in HIGH_IMPACT_FUNCTIONS:
        return "High"
    if name in MEDIUM_IMPACT_FUNCTIONS:
        return "Medium"
    return "Low"


def function_usage(state: AnalysisState) -> list[tuple[str, int, str]]:
    """
    Count how many formulas call each observed function.

    Returns:
        (name, formula count, impact) tuples sorted by name
    """
    usage = []
    for name in state.function_names:
        count = sum(1 for result in state.results if name in result.features.function_names)
        usage.append((name, count, function_impact(name)))
    return usage


def categorize_functions(names) -> dict[str, list[str]]:
    """Group function names into catalog categories, keeping input order."""
    known = {name for members in FUNCTION_CATEGORIES.values() for name in members}
    groups = {
        category: [name for name in names if name in members]
        for category, members in FUNCTION_CATEGORIES.items()
    }
    groups[OTHER_CATEGORY] = [name for name in names if name not in known]
    return groups
