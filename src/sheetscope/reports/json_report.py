"""Structured JSON report."""

import json
from datetime import datetime
from typing import Optional

from ..engine.models import AnalysisState, Category


def build_json_document(
    state: AnalysisState,
    base_name: str,
    generated_at: Optional[datetime] = None,
) -> dict:
    """Build the JSON-serializable analysis document."""
    generated_at = generated_at or datetime.now()
    return {
        "file": base_name,
        "generated_at": generated_at.isoformat(),
        "summary": {
            "total_formulas": state.total,
            "worksheets": state.sheet_count,
            "unique_functions": list(state.function_names),
            "complexity_distribution": {
                category.value.lower(): state.count(category) for category in Category
            },
        },
        "formulas_by_category": {
            category.value: [result.to_dict() for result in state.by_category[category]]
            for category in Category
        },
        "formulas_by_sheet": {
            sheet: [result.to_dict() for result in results]
            for sheet, results in state.by_sheet.items()
        },
        "all_formulas": [result.to_dict() for result in state.results],
    }


def render_json(
    state: AnalysisState,
    base_name: str,
    generated_at: Optional[datetime] = None,
) -> str:
    return json.dumps(
        build_json_document(state, base_name, generated_at),
        indent=2,
        ensure_ascii=False,
    )
