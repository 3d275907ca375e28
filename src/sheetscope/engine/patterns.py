"""Pattern library for fast-path formula classification.

Each rule pairs a compiled regular expression with the category it decides.
Rules are evaluated in order and the first match wins, so every
complex-indicating rule is placed ahead of the simple-indicating ones: a
formula that matches both kinds resolves to COMPLEX.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern

from .models import Category


@dataclass(frozen=True)
class FormulaPattern:
    """A named text-matching rule over raw formula text."""

    name: str
    regex: Pattern
    description: str = ""

    def matches(self, formula: str) -> bool:
        return self.regex.search(formula) is not None


PatternRule = tuple[FormulaPattern, Category]


def _pattern(name: str, expression: str, description: str, flags: int = 0) -> FormulaPattern:
    return FormulaPattern(
        name=name,
        regex=re.compile(expression, flags),
        description=description,
    )


COMPLEX_PATTERNS: tuple[FormulaPattern, ...] = (
    _pattern("sumproduct", r"SUMPRODUCT", "Array aggregation", re.IGNORECASE),
    _pattern("index_match", r"INDEX.*MATCH", "INDEX/MATCH lookup", re.IGNORECASE),
    _pattern("nested_vlookup", r"VLOOKUP.*VLOOKUP", "Nested VLOOKUPs", re.IGNORECASE),
    _pattern("triple_if", r"IF.*IF.*IF", "Three or more conditionals", re.IGNORECASE),
    _pattern(
        "iferror_vlookup_if",
        r"IFERROR.*VLOOKUP.*IF",
        "Error-wrapped lookup with a conditional",
        re.IGNORECASE,
    ),
    _pattern(
        "absolute_range",
        r"\$[A-Z]+\$\d+:\$[A-Z]+\$\d+",
        "Fixed absolute range spanning multiple cells",
    ),
    _pattern("array_literal", r"\{.*\}", "Array literal syntax"),
    _pattern("concatenate_if", r"CONCATENATE.*IF", "Conditional concatenation", re.IGNORECASE),
    _pattern("sum_double_if", r"SUM.*IF.*IF", "Aggregation over nested conditions", re.IGNORECASE),
    _pattern("chained_concatenation", r".*&.*&.*&", "Three or more concatenation operators"),
    _pattern(
        "and_nested_if",
        r"IF\(AND\(.*,.*\),.*,IF\(",
        "Compound condition with a nested IF",
        re.IGNORECASE,
    ),
    _pattern("trim_mid", r"TRIM\(MID\(", "Text extraction", re.IGNORECASE),
    _pattern("search_mid", r"SEARCH.*MID", "Text search and extraction", re.IGNORECASE),
)

# Outcome of a blank check: a quoted literal or a single cell reference
_BLANK_CHECK_OUTCOME = r'(?:"[^"]*"|\$?[A-Z]+\$?\d+)'

SIMPLE_PATTERNS: tuple[FormulaPattern, ...] = (
    _pattern("cell_reference", r"^[A-Z]+\d+$", "Bare cell reference, e.g. A1"),
    _pattern(
        "reference_arithmetic",
        r"^[A-Z]+\d+[+\-*/][A-Z]+\d+$",
        "Arithmetic between two references, e.g. A1+B1",
    ),
    _pattern(
        "absolute_division",
        r"^[A-Z]+\d+/\$[A-Z]+\$\d+$",
        "Division by an absolute cell, e.g. D2/$H$16",
    ),
    _pattern(
        "blank_check",
        rf"^IF\(ISBLANK\([^,)]+\),{_BLANK_CHECK_OUTCOME},{_BLANK_CHECK_OUTCOME}\)$",
        'Blank check, e.g. IF(ISBLANK(A1),"",A1)',
    ),
    _pattern("literal_concatenation", r'^"[^"]*"&[A-Z]+\d+$', 'Literal prefix, e.g. "x"&A1'),
    _pattern("sheet_reference", r"^[A-Z_]+![A-Z]+\d+$", "Inter-sheet reference, e.g. Data!F27"),
    _pattern("number", r"^\d+(\.\d+)?$", "Numeric literal"),
    _pattern("scaled_reference", r"^[A-Z]+\d+\*[\d.]+$", "Reference times a number, e.g. A1*1.2"),
)

DEFAULT_RULES: tuple[PatternRule, ...] = tuple(
    (pattern, Category.COMPLEX) for pattern in COMPLEX_PATTERNS
) + tuple((pattern, Category.SIMPLE) for pattern in SIMPLE_PATTERNS)


class PatternLibrary:
    """Ordered, immutable set of pattern rules."""

    def __init__(self, rules: Optional[Iterable[PatternRule]] = None):
        self.rules: tuple[PatternRule, ...] = (
            tuple(rules) if rules is not None else DEFAULT_RULES
        )

    def __len__(self) -> int:
        return len(self.rules)

    def match(self, formula: str) -> Optional[PatternRule]:
        """Return the first rule matching the formula, or None."""
        for pattern, category in self.rules:
            if pattern.matches(formula):
                return pattern, category
        return None

    def classify(self, formula: str) -> Optional[Category]:
        matched = self.match(formula)
        return matched[1] if matched else None

    def with_rule(
        self,
        name: str,
        expression: str,
        category: Category,
        description: str = "",
        flags: int = 0,
        first: bool = False,
    ) -> "PatternLibrary":
        """Return a new library with an extra rule appended (or prepended)."""
        rule = (_pattern(name, expression, description, flags), category)
        rules = (rule,) + self.rules if first else self.rules + (rule,)
        return PatternLibrary(rules)


_default_library = PatternLibrary()


def match_pattern(formula: str) -> Optional[PatternRule]:
    """Match a formula against the default rules."""
    return _default_library.match(formula)


def classify_by_pattern(formula: str) -> Optional[Category]:
    """Decide a category by pattern alone; None falls through to scoring."""
    return _default_library.classify(formula)
