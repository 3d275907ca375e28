"""Long-form Markdown analysis report."""

from datetime import datetime
from typing import Optional

from ..config import settings
from ..engine.models import AnalysisState, Category, ClassificationResult
from ..errors import EmptyCorpusError
from .functions import categorize_functions, function_usage
from .migration import MigrationPlan, build_migration_plan

CATEGORY_MARKERS = {
    Category.SIMPLE: "🟢",
    Category.MEDIUM: "🟡",
    Category.COMPLEX: "🔴",
}
RISK_MARKERS = {"Low": "🟢", "Medium": "🟡", "High": "🔴"}

CATEGORY_CHARACTERISTICS = {
    Category.SIMPLE: [
        "Direct cell references (e.g., `=A1`, `=Basic_Data!F27`)",
        "Basic arithmetic operations (e.g., `=A1+B1`, `=D2/$H$16`)",
        'Simple conditional logic (e.g., `=IF(ISBLANK(A1),"",A1)`)',
        "Basic text concatenation",
    ],
    Category.MEDIUM: [
        "VLOOKUP operations with error handling",
        "Multiple nested IF conditions",
        "Text processing functions",
        "Conditional aggregations (SUMIF, COUNTIF)",
    ],
    Category.COMPLEX: [
        "Multiple nested functions (3+ levels)",
        "Array formulas and advanced lookups",
        "Complex text processing and parsing",
        "Multi-criteria conditional logic",
    ],
}
CATEGORY_EFFORT = {
    Category.SIMPLE: "Low risk, 1-2 person-days per 10 formulas",
    Category.MEDIUM: "Medium risk, 0.5-1 person-day per formula",
    Category.COMPLEX: "High risk, 1-2 person-days per formula",
}

DOMINANT_SHARE = 0.4
MODERATE_SHARE = 0.2
TOP_SHEETS = 3
SHEET_SAMPLE_LIMIT = 3
SHEET_PREVIEW_CHARS = 100


def escape_formula(formula: str) -> str:
    """Escape characters that would break inline code inside a table."""
    return formula.replace("`", "\\`").replace("|", "\\|")


def preview_formula(formula: str, limit: int) -> str:
    if len(formula) > limit:
        formula = formula[: limit - 3] + "..."
    return escape_formula(formula)


def complexity_rating(state: AnalysisState) -> str:
    """Overall rating from the share of complex formulas."""
    complex_count = state.count(Category.COMPLEX)
    if complex_count > state.total * DOMINANT_SHARE:
        return "High"
    if complex_count > state.total * MODERATE_SHARE:
        return "Medium"
    return "Low"


def primary_complexity(state: AnalysisState, sheet: str) -> Category:
    """Dominant category of a sheet."""
    counts = state.sheet_counts(sheet)
    sheet_total = sum(counts.values())
    if counts[Category.COMPLEX] > sheet_total * DOMINANT_SHARE:
        return Category.COMPLEX
    if counts[Category.MEDIUM] > sheet_total * DOMINANT_SHARE:
        return Category.MEDIUM
    return Category.SIMPLE


def _inventory_line(index: int, result: ClassificationResult) -> str:
    record = result.record
    return f"{index:>3}. {record.address}: `{escape_formula(record.formula)}`"


class MarkdownReportBuilder:
    """Builds the narrative report section by section."""

    def __init__(
        self,
        state: AnalysisState,
        base_name: str,
        generated_at: Optional[datetime] = None,
    ):
        if state.is_empty:
            raise EmptyCorpusError("Cannot build a report for an empty corpus")
        self.state = state
        self.base_name = base_name
        self.generated_at = generated_at or datetime.now()
        self.plan: MigrationPlan = build_migration_plan(state)
        self.lines: list[str] = []

    def _add(self, *lines: str):
        self.lines.extend(lines)

    def build(self) -> str:
        self.lines = []
        self._header()
        self._executive_summary()
        self._category_sections()
        self._worksheet_analysis()
        self._function_usage()
        self._migration_strategy()
        self._appendix()
        return "\n".join(self.lines) + "\n"

    def _header(self):
        self._add(
            "# Excel Formula Analysis Report",
            "",
            f"**File**: {self.base_name}  ",
            f"**Analysis Date**: {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}  ",
            "**Generated by**: SheetScope",
            "",
            "---",
            "",
        )

    def _executive_summary(self):
        state = self.state
        self._add(
            "## Executive Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| **Total Formulas** | {state.total} |",
            f"| **Worksheets Analyzed** | {state.sheet_count} |",
            f"| **Unique Excel Functions** | {len(state.function_names)} |",
            f"| **Complexity Score** | {complexity_rating(state)} |",
            "",
            "### Complexity Distribution",
            "",
            "```",
            "Formula Complexity Breakdown:",
        )
        for category in Category:
            label = f"{category.label}:"
            self._add(
                f"   {label:<8} {state.count(category):>3} ({state.percentage(category):.1f}%)"
            )
        self._add("```", "", "---", "")

    def _category_sections(self):
        state = self.state
        limit = settings.sample_limit
        self._add("## Detailed Analysis", "", "### Formula Distribution by Complexity", "")

        for category in Category:
            results = state.by_category[category]
            self._add(
                f"#### {CATEGORY_MARKERS[category]} {category.label} Formulas "
                f"({len(results)} formulas - {state.percentage(category):.1f}%)",
                "",
                "**Characteristics:**",
            )
            self._add(*(f"- {item}" for item in CATEGORY_CHARACTERISTICS[category]))
            self._add(
                "",
                f"**Migration Effort**: {CATEGORY_EFFORT[category]}",
                "",
                "**Examples:**",
                "",
                "| Sheet | Cell | Formula |",
                "|-------|------|---------|",
            )
            for result in results[:limit]:
                record = result.record
                formula = preview_formula(record.formula, settings.formula_preview_chars)
                self._add(f"| {record.sheet} | {record.cell} | `{formula}` |")
            if len(results) > limit:
                self._add(f"| ... | ... | *{len(results) - limit} more formulas* |")
            self._add("")

        self._add("---", "")

    def _worksheet_analysis(self):
        state = self.state
        sheets = state.sheets_by_size()
        self._add(
            "## Worksheet Analysis",
            "",
            "### Formula Distribution by Sheet",
            "",
            "| Worksheet | Formula Count | Percentage | Primary Complexity |",
            "|-----------|---------------|------------|-------------------|",
        )
        for sheet, results in sheets:
            primary = primary_complexity(state, sheet)
            share = len(results) / state.total * 100
            self._add(
                f"| {sheet} | {len(results)} | {share:.1f}% | "
                f"{CATEGORY_MARKERS[primary]} {primary.label} |"
            )

        self._add("", "### Top Formula-Heavy Worksheets", "")
        for index, (sheet, results) in enumerate(sheets[:TOP_SHEETS], start=1):
            counts = state.sheet_counts(sheet)
            self._add(
                f"#### {index}. {sheet} ({len(results)} formulas)",
                "",
                "**Complexity Breakdown:**",
            )
            self._add(*(f"- {category.label}: {counts[category]} formulas" for category in Category))
            self._add("", "**Sample Formulas:**")
            for result in results[:SHEET_SAMPLE_LIMIT]:
                formula = preview_formula(result.record.formula, SHEET_PREVIEW_CHARS)
                self._add(f"- `{result.record.cell}`: `{formula}`")
            self._add("")

        self._add("---", "")

    def _function_usage(self):
        self._add(
            "## Excel Functions Usage",
            "",
            "### Function Frequency Analysis",
            "",
            "| Function | Usage Count | Complexity Impact |",
            "|----------|-------------|------------------|",
        )
        for name, count, impact in function_usage(self.state):
            self._add(f"| {name} | {count} | {impact} |")

        self._add("", "### Function Categories", "")
        for category, names in categorize_functions(self.state.function_names).items():
            self._add(f"**{category}:**", ", ".join(names) or "None found", "")

        self._add("---", "")

    def _migration_strategy(self):
        plan = self.plan
        total = self.state.total
        phase_one, phase_two, phase_three = plan.phases

        self._add(
            "## Migration Strategy & Recommendations",
            "",
            "### Phased Implementation Approach",
            "",
            f"#### 🚀 Phase 1: {phase_one.name} ({phase_one.timeline})",
            f"**Target**: {phase_one.target} formulas",
            f"- **Simple formulas**: All {self.state.count(Category.SIMPLE)} formulas",
            f"- **Essential medium**: {plan.essential_medium} selected medium complexity formulas",
            f"- **Coverage**: ~{phase_one.coverage(total):.0f}% of functionality",
            f"- **Effort**: {phase_one.effort_label} person-days",
            f"- **Risk**: {RISK_MARKERS[phase_one.risk]} {phase_one.risk}",
            "",
            f"#### 🔧 Phase 2: {phase_two.name} ({phase_two.timeline})",
            f"**Target**: {phase_two.target} formulas",
            f"- **Remaining medium**: {plan.remaining_medium} formulas",
            f"- **Selected complex**: {plan.selected_complex} formulas",
            f"- **Coverage**: ~{phase_two.coverage(total):.0f}% additional functionality",
            f"- **Effort**: {phase_two.effort_label} person-days",
            f"- **Risk**: {RISK_MARKERS[phase_two.risk]} {phase_two.risk}",
            "",
            f"#### 🎯 Phase 3: {phase_three.name} ({phase_three.timeline})",
            f"**Target**: {phase_three.target} formulas",
            "- **Remaining complex**: All remaining complex formulas",
            "- **Coverage**: 100% feature parity",
            f"- **Effort**: {phase_three.effort_label} person-days",
            f"- **Risk**: {RISK_MARKERS[phase_three.risk]} {phase_three.risk}",
            "",
            "### Total Project Estimation",
            "",
            "| Phase | Formulas | Effort (Days) | Timeline | Risk Level |",
            "|-------|----------|---------------|----------|------------|",
        )
        for phase in plan.phases:
            self._add(
                f"| Phase {phase.number} ({phase.name}) | {phase.target} | {phase.effort_label} | "
                f"{phase.timeline} | {RISK_MARKERS[phase.risk]} {phase.risk} |"
            )
        low, high = plan.effort_days
        self._add(
            f"| **TOTAL** | **{total}** | **{low}-{high}** | **10 months** | **Mixed** |",
            "",
            "### Risk Assessment",
            "",
            f"#### 🟢 Low Risk Items ({self.state.count(Category.SIMPLE)} formulas)",
            "- **Direct migration**: Can be translated 1:1",
            "- **Minimal testing required**: Standard unit tests sufficient",
            "",
            f"#### 🟡 Medium Risk Items ({self.state.count(Category.MEDIUM)} formulas)",
            "- **Logic mapping required**: May need algorithm adjustments",
            "- **Integration testing**: Cross-functional dependencies",
            "",
            f"#### 🔴 High Risk Items ({self.state.count(Category.COMPLEX)} formulas)",
            "- **Potential redesign**: May require new algorithms",
            "- **Extensive testing**: Complex validation scenarios",
            "",
            "---",
            "",
        )

    def _appendix(self):
        limits = {
            Category.SIMPLE: None,
            Category.MEDIUM: settings.medium_inventory_limit,
            Category.COMPLEX: settings.complex_inventory_limit,
        }
        self._add("## Appendix", "", "### Complete Formula Inventory", "")

        for category in Category:
            results = self.state.by_category[category]
            limit = limits[category]
            shown = results if limit is None else results[:limit]
            self._add(f"#### {category.label} Formulas ({len(results)} total)")
            self._add(*(_inventory_line(i, r) for i, r in enumerate(shown, start=1)))
            if len(shown) < len(results):
                self._add(
                    "",
                    f"*... and {len(results) - len(shown)} more "
                    f"{category.label.lower()} formulas*",
                )
            self._add("")

        self._add(
            "---",
            "",
            f"*Report generated on {self.generated_at.isoformat()}*",
        )


def render_markdown(
    state: AnalysisState,
    base_name: str,
    generated_at: Optional[datetime] = None,
) -> str:
    return MarkdownReportBuilder(state, base_name, generated_at).build()
