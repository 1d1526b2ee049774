"""Nutrition Math Validator.

Decides whether a normalized plan satisfies its generation constraints and
returns the first failing check, not a full report: the retry loop consumes
one issue at a time.

Check order (fixed):
1. Plan daily calories vs target
2. Plan protein, carbs, fats vs macro targets
3. Per day: meal count (fatal, tolerance 0)
4. Per day: day-total calories vs target
5. Per day: day-total protein, carbs, fats vs macro targets
6. Two meals per day: each meal's calories vs target / 2

Both sides are rounded to the field precision before subtracting.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fitplan.planning.invariants import DEFAULT_TOLERANCES, ROUNDING, MathTolerances
from fitplan.planning.normalize.nutrition import compute_day_totals
from fitplan.planning.rounding import round_half_away_from_zero
from fitplan.planning.schema.issues import Diff, ValidationIssue
from fitplan.planning.schema.parsing import parse_nutrition_plan
from fitplan.planning.schema.plan import NutritionPlan


@dataclass(frozen=True)
class MacroTargets:
    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class NutritionMathConstraints:
    """Generation constraints from user preferences.

    Attributes:
        target_kcal: Daily calorie target
        meals_per_day: Exact number of meals each day must have
        macro_targets: Optional daily macro targets in grams
    """

    target_kcal: float
    meals_per_day: int
    macro_targets: MacroTargets | None = None


def build_diff(actual: float, expected: float, tolerance: float, decimals: int) -> Diff:
    rounded_actual = round_half_away_from_zero(actual, decimals)
    rounded_expected = round_half_away_from_zero(expected, decimals)
    delta = round_half_away_from_zero(rounded_actual - rounded_expected, decimals)
    abs_delta = abs(delta)
    rounded_tolerance = round_half_away_from_zero(tolerance, decimals)
    return Diff(
        expected=rounded_expected,
        actual=rounded_actual,
        delta=delta,
        abs_delta=abs_delta,
        tolerance=rounded_tolerance,
        within_tolerance=abs_delta <= rounded_tolerance,
    )


def _check(reason: str, actual: float, expected: float, tolerance: float, decimals: int) -> ValidationIssue | None:
    diff = build_diff(actual, expected, tolerance, decimals)
    if diff.within_tolerance:
        return None
    return ValidationIssue(reason=reason, diff=diff)


def _with_location(issue: ValidationIssue, day_label: str, meal_title: str | None = None) -> ValidationIssue:
    return ValidationIssue(reason=issue.reason, diff=issue.diff, day_label=day_label, meal_title=meal_title)


def validate_nutrition_math(
    plan: NutritionPlan | Mapping[str, Any],
    constraints: NutritionMathConstraints,
    tolerances: MathTolerances = DEFAULT_TOLERANCES,
) -> ValidationIssue | None:
    """Return the first violated math invariant, or None.

    Args:
        plan: Normalized nutrition plan (model or raw document)
        constraints: Calorie, meal count and macro targets
        tolerances: Validator tolerances

    Returns:
        ValidationIssue for the first failing check, None if all pass
    """
    nutrition_plan = parse_nutrition_plan(plan)
    macro_targets = constraints.macro_targets
    kcal_tolerance = tolerances.daily_kcal_tolerance(constraints.target_kcal)
    grams_tolerance = tolerances.macro_grams_absolute

    issue = _check(
        "DAILY_CALORIES_MISMATCH",
        nutrition_plan.daily_calories,
        constraints.target_kcal,
        kcal_tolerance,
        ROUNDING.kcal_decimals,
    )
    if issue:
        return issue

    if macro_targets:
        for reason, actual, expected in (
            ("PROTEIN_MISMATCH", nutrition_plan.protein_g, macro_targets.protein_g),
            ("CARBS_MISMATCH", nutrition_plan.carbs_g, macro_targets.carbs_g),
            ("FATS_MISMATCH", nutrition_plan.fat_g, macro_targets.fats_g),
        ):
            issue = _check(reason, actual, expected, grams_tolerance, ROUNDING.grams_decimals)
            if issue:
                return issue

    for day in nutrition_plan.days:
        meal_count = len(day.meals)
        if meal_count != constraints.meals_per_day:
            delta = meal_count - constraints.meals_per_day
            return ValidationIssue(
                reason="MEALS_PER_DAY_MISMATCH",
                day_label=day.day_label,
                diff=Diff(
                    expected=constraints.meals_per_day,
                    actual=meal_count,
                    delta=delta,
                    abs_delta=abs(delta),
                    tolerance=0,
                    within_tolerance=False,
                ),
            )

        totals = compute_day_totals(day)
        issue = _check(
            "DAY_TOTAL_CALORIES_MISMATCH",
            totals.calories,
            constraints.target_kcal,
            kcal_tolerance,
            ROUNDING.kcal_decimals,
        )
        if issue:
            return _with_location(issue, day.day_label)

        if macro_targets:
            for reason, actual, expected in (
                ("DAY_TOTAL_PROTEIN_MISMATCH", totals.protein, macro_targets.protein_g),
                ("DAY_TOTAL_CARBS_MISMATCH", totals.carbs, macro_targets.carbs_g),
                ("DAY_TOTAL_FATS_MISMATCH", totals.fats, macro_targets.fats_g),
            ):
                issue = _check(reason, actual, expected, grams_tolerance, ROUNDING.grams_decimals)
                if issue:
                    return _with_location(issue, day.day_label)

        if constraints.meals_per_day == 2:
            expected_meal_kcal = constraints.target_kcal / 2
            for meal in day.meals:
                issue = _check(
                    "TWO_MEAL_SPLIT_MISMATCH",
                    meal.macros.calories,
                    expected_meal_kcal,
                    tolerances.two_meal_split_kcal_absolute,
                    ROUNDING.kcal_decimals,
                )
                if issue:
                    return _with_location(issue, day.day_label, meal.title)

    return None
