"""Retry feedback for the next generation attempt.

Turns one validation issue into a short instruction for the follow-up model
call. Builders are pure string functions and never raise: an incomplete
context (partial or legacy telemetry payloads) yields "".
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fitplan.planning.rounding import round_half_away_from_zero
from fitplan.planning.schema.issues import ValidationIssue

UNKNOWN_DAY = "día desconocido"
UNKNOWN_MEAL = "comida desconocida"


def _as_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value if math.isfinite(value) else None


def _first_key(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


def format_number(value: float) -> str:
    """Render integral values without a trailing .0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class RetryContext:
    """Known retry context fields; any of them may be absent.

    Attributes:
        reason: Validation reason code
        day_label: Offending day
        meal_title: Offending meal
        expected: Expected value
        actual: Actual value
        tolerance: Allowed deviation
    """

    reason: str | None = None
    day_label: str | None = None
    meal_title: str | None = None
    expected: float | None = None
    actual: float | None = None
    tolerance: float | None = None

    @classmethod
    def from_issue(cls, issue: ValidationIssue) -> "RetryContext":
        return cls(
            reason=issue.reason,
            day_label=issue.day_label,
            meal_title=issue.meal_title,
            expected=issue.diff.expected,
            actual=issue.diff.actual,
            tolerance=issue.diff.tolerance,
        )

    @classmethod
    def from_payload(cls, payload: Any) -> "RetryContext":
        """Coerce an issue, context or untyped mapping into a RetryContext.

        Top-level numbers win over the nested "diff" mapping. Anything that
        is not a mapping yields an empty context.
        """
        if isinstance(payload, RetryContext):
            return payload
        if isinstance(payload, ValidationIssue):
            return cls.from_issue(payload)
        if not isinstance(payload, Mapping):
            return cls()

        diff = payload.get("diff")
        if not isinstance(diff, Mapping):
            diff = {}

        def number(key: str) -> float | None:
            top_level = _as_number(payload.get(key))
            return top_level if top_level is not None else _as_number(diff.get(key))

        return cls(
            reason=_as_text(payload.get("reason")),
            day_label=_as_text(_first_key(payload, "dayLabel", "day_label")),
            meal_title=_as_text(_first_key(payload, "mealTitle", "meal_title")),
            expected=number("expected"),
            actual=number("actual"),
            tolerance=number("tolerance"),
        )


def build_retry_feedback(context: RetryContext | ValidationIssue | Mapping[str, Any] | None) -> str:
    """General feedback: "<reason> en <day>: expected=<e>, actual=<a>[, tolerance=±<t>]"."""
    ctx = RetryContext.from_payload(context)
    if not ctx.reason or ctx.expected is None or ctx.actual is None:
        return ""

    day_label = ctx.day_label if ctx.day_label is not None else UNKNOWN_DAY
    feedback = f"{ctx.reason} en {day_label}: expected={format_number(ctx.expected)}, actual={format_number(ctx.actual)}"
    if ctx.tolerance is not None:
        feedback += f", tolerance=±{format_number(ctx.tolerance)}"
    return feedback


def build_two_meal_split_retry_instruction(context: RetryContext | ValidationIssue | Mapping[str, Any] | None) -> str:
    """Focused retry for TWO_MEAL_SPLIT_MISMATCH: fix only the offending meal.

    The instruction pins the day and meal and asks to keep the rest intact.
    """
    ctx = RetryContext.from_payload(context)
    if ctx.reason != "TWO_MEAL_SPLIT_MISMATCH":
        return ""
    if ctx.expected is None or ctx.actual is None or ctx.tolerance is None:
        return ""

    day_label = ctx.day_label if ctx.day_label is not None else UNKNOWN_DAY
    meal_title = ctx.meal_title if ctx.meal_title is not None else UNKNOWN_MEAL
    return (
        f"REINTENTO FOCALIZADO TWO_MEAL_SPLIT_MISMATCH: dayLabel={day_label}, mealTitle={meal_title}, "
        f"expected={format_number(ctx.expected)}, actual={format_number(ctx.actual)}, "
        f"tolerance=±{format_number(ctx.tolerance)}. "
        "Ajusta SOLO esa comida para que sus calorías queden dentro del rango permitido "
        "y mantén el resto del plan intacto."
    )


def build_meal_kcal_guidance(target_kcal: Any, meals_per_day: Any, tolerance: Any) -> str:
    """Proactive per-meal calorie guidance for the next generation prompt.

    Args:
        target_kcal: Daily calorie target
        meals_per_day: Meals per day
        tolerance: Per-meal tolerance in kcal

    Returns:
        Guidance sentence with expected kcal per meal = round(target / meals),
        or "" when the inputs are not usable numbers
    """
    target = _as_number(target_kcal)
    meals = _as_number(meals_per_day)
    meal_tolerance = _as_number(tolerance)
    if target is None or meals is None or meal_tolerance is None or meals <= 0:
        return ""

    expected_per_meal = int(round_half_away_from_zero(target / meals))
    target_text = format_number(target)
    tolerance_text = format_number(meal_tolerance)
    if meals == 2:
        return (
            f"OBJETIVO POR COMIDA (2 comidas/día): targetKcal total={target_text}, "
            f"expected por comida={expected_per_meal} kcal (round(targetKcal/mealsPerDay)), "
            f"tolerancia por comida=±{tolerance_text} kcal. "
            "REGLA DURA: cada comida debe quedar dentro de tolerancia."
        )

    return (
        f"OBJETIVO POR COMIDA: targetKcal total={target_text}, mealsPerDay={format_number(meals)}, "
        f"expected por comida≈{expected_per_meal} kcal, tolerancia por comida=±{tolerance_text} kcal. "
        "REGLA DURA: cada comida debe quedar dentro de tolerancia."
    )
