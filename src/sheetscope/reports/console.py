"""Plain-text summary printed to the terminal after an analysis run."""

from ..config import settings
from ..engine.models import AnalysisState, Category
from ..errors import EmptyCorpusError
from .migration import build_migration_plan

RULE_WIDTH = 60


def render_console_summary(state: AnalysisState) -> str:
    """Render summary statistics, samples and migration recommendations."""
    if state.is_empty:
        raise EmptyCorpusError("Cannot summarize an empty corpus")

    lines = [
        "=" * RULE_WIDTH,
        "EXCEL FORMULA ANALYSIS REPORT",
        "=" * RULE_WIDTH,
        "",
        "SUMMARY STATISTICS",
        "-" * 30,
        f"Total Formulas: {state.total}",
        f"Worksheets with Formulas: {state.sheet_count}",
        f"Unique Excel Functions: {len(state.function_names)}",
        "",
        "COMPLEXITY DISTRIBUTION",
        "-" * 30,
    ]
    for category in Category:
        label = f"{category.label}:"
        lines.append(
            f"{label:<8} {state.count(category):>3} ({state.percentage(category):.1f}%)"
        )

    lines += ["", "EXCEL FUNCTIONS USED", "-" * 30, ", ".join(state.function_names)]

    lines += ["", "FORMULAS BY WORKSHEET", "-" * 30]
    for sheet, results in state.sheets_by_size():
        lines.append(f"{sheet:<25} {len(results):>3} formulas")

    limit = settings.sample_limit
    lines += ["", "SAMPLE FORMULAS BY CATEGORY", "-" * 40]
    for category in Category:
        results = state.by_category[category]
        lines += ["", f"{category.value} FORMULAS ({len(results)} total):"]
        for index, result in enumerate(results[:limit], start=1):
            lines.append(f"  {index}. {result.record.address}: {result.record.formula}")
        if len(results) > limit:
            lines.append(f"  ... and {len(results) - limit} more")

    plan = build_migration_plan(state)
    lines += ["", "MIGRATION RECOMMENDATIONS", "-" * 40]
    for phase in plan.phases:
        lines += [
            "",
            f"PHASE {phase.number}: {phase.name}",
            f"  Target: {phase.target} formulas ({phase.description})",
            f"  Effort: {phase.effort_label} person-days",
            f"  Risk: {phase.risk}",
        ]
    low, high = plan.effort_days
    lines += ["", f"Total Estimated Effort: {low}-{high} person-days"]

    return "\n".join(lines)
