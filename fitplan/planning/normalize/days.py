"""Day alignment for generated nutrition plans.

The model frequently returns fewer days than requested, or days with stale
dates and a repeated weekday label. Days are cycled up to the requested count
and re-dated from the plan start; labels are derived from each date.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from fitplan.planning.schema.issues import DayAlignmentIssue
from fitplan.planning.schema.parsing import parse_nutrition_plan
from fitplan.planning.schema.plan import NutritionDay, NutritionPlan

# date.weekday() index -> label shown to users
WEEKDAY_LABELS: tuple[str, ...] = ("Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado", "Domingo")


@dataclass(frozen=True)
class DayAlignmentResult:
    plan: NutritionPlan
    alignment_issues: list[DayAlignmentIssue]


def weekday_label(day: date) -> str:
    return WEEKDAY_LABELS[day.weekday()]


def ensure_day_count(days: list[NutritionDay], days_count: int) -> list[NutritionDay]:
    """Cycle days until exactly `days_count` exist (independent copies).

    An empty list stays empty: there is nothing to repeat.
    """
    if not days:
        return []
    return [days[index % len(days)].model_copy(deep=True) for index in range(days_count)]


def normalize_plan_days(
    plan: NutritionPlan | Mapping[str, Any],
    start_date: date,
    days_count: int,
) -> DayAlignmentResult:
    """Align plan days to consecutive dates starting at `start_date`.

    Args:
        plan: Nutrition plan (model or raw document)
        start_date: Date of day 1
        days_count: Number of days the plan must contain

    Returns:
        DayAlignmentResult with one issue per day whose incoming date was
        missing or different from the expected one
    """
    nutrition_plan = parse_nutrition_plan(plan)
    alignment_issues: list[DayAlignmentIssue] = []
    days = []

    for index, day in enumerate(ensure_day_count(nutrition_plan.days, days_count)):
        expected = start_date + timedelta(days=index)
        expected_iso = expected.isoformat()
        if day.date != expected_iso:
            alignment_issues.append(
                DayAlignmentIssue(index=index, incoming_date=day.date, expected_date=expected_iso)
            )
        days.append(day.model_copy(update={"date": expected_iso, "day_label": weekday_label(expected)}))

    return DayAlignmentResult(
        plan=nutrition_plan.model_copy(update={"start_date": start_date.isoformat(), "days": days}, deep=True),
        alignment_issues=alignment_issues,
    )
