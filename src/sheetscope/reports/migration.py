"""Phased migration-effort estimates derived from category counts."""

import math
from dataclasses import dataclass

from ..engine.models import AnalysisState, Category
from ..errors import EmptyCorpusError

# Share of a category scheduled into a phase
ESSENTIAL_MEDIUM_SHARE = 0.4
REMAINING_MEDIUM_SHARE = 0.6
SELECTED_COMPLEX_SHARE = 0.3
REMAINING_COMPLEX_SHARE = 0.7

TOTAL_EFFORT_DAYS = (75, 110)


@dataclass
class MigrationPhase:
    """One phase of the recommended migration."""

    number: int
    name: str
    target: int
    description: str
    effort_days: tuple[int, int]
    timeline: str
    risk: str  # "Low", "Medium", "High"

    @property
    def effort_label(self) -> str:
        return f"{self.effort_days[0]}-{self.effort_days[1]}"

    def coverage(self, total: int) -> float:
        """Percentage of the corpus this phase targets."""
        return self.target / total * 100 if total else 0.0


@dataclass
class MigrationPlan:
    """Three-phase plan with fixed effort ranges."""

    total_formulas: int
    essential_medium: int
    remaining_medium: int
    selected_complex: int
    remaining_complex: int
    phases: list[MigrationPhase]

    @property
    def effort_days(self) -> tuple[int, int]:
        return TOTAL_EFFORT_DAYS


def build_migration_plan(state: AnalysisState) -> MigrationPlan:
    """Split the corpus into MVP, enhancement and completion phases."""
    if state.is_empty:
        raise EmptyCorpusError("Cannot plan a migration for an empty corpus")

    simple = state.count(Category.SIMPLE)
    medium = state.count(Category.MEDIUM)
    complex_ = state.count(Category.COMPLEX)

    essential_medium = math.floor(medium * ESSENTIAL_MEDIUM_SHARE)
    remaining_medium = math.ceil(medium * REMAINING_MEDIUM_SHARE)
    selected_complex = math.floor(complex_ * SELECTED_COMPLEX_SHARE)
    remaining_complex = math.ceil(complex_ * REMAINING_COMPLEX_SHARE)

    phases = [
        MigrationPhase(
            number=1,
            name="MVP Foundation",
            target=simple + essential_medium,
            description=f"{simple} simple + {essential_medium} essential medium",
            effort_days=(20, 30),
            timeline="Months 1-4",
            risk="Low",
        ),
        MigrationPhase(
            number=2,
            name="Enhanced Features",
            target=remaining_medium + selected_complex,
            description=f"{remaining_medium} remaining medium + {selected_complex} selected complex",
            effort_days=(25, 35),
            timeline="Months 5-7",
            risk="Medium",
        ),
        MigrationPhase(
            number=3,
            name="Complete Migration",
            target=remaining_complex,
            description=f"{remaining_complex} remaining complex",
            effort_days=(30, 45),
            timeline="Months 8-10",
            risk="High",
        ),
    ]

    return MigrationPlan(
        total_formulas=state.total,
        essential_medium=essential_medium,
        remaining_medium=remaining_medium,
        selected_complex=selected_complex,
        remaining_complex=remaining_complex,
        phases=phases,
    )
