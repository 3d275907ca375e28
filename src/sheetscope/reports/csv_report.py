"""Flat CSV export, one row per formula."""

import csv
import io

from ..engine.models import AnalysisState

CSV_COLUMNS = ["Sheet", "Cell", "Formula", "Category", "Length", "FunctionCount"]


def render_csv(state: AnalysisState) -> str:
    """Render every classified formula as a CSV row, in discovery order."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for result in state.results:
        writer.writerow(
            [
                result.record.sheet,
                result.record.cell,
                result.record.formula,
                result.category.value,
                result.features.length,
                result.features.function_count,
            ]
        )
    return buf.getvalue()
