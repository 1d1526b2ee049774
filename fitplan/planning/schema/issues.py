"""Diagnostics returned by the pipeline.

All schemas are frozen dataclasses for immutability. None of these are
raised: they are data for the orchestrator's retry and logging decisions.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class Diff:
    """Expected/actual comparison, already rounded to the field precision.

    Attributes:
        expected: Target value
        actual: Observed value
        delta: actual - expected
        abs_delta: |delta|
        tolerance: Allowed |delta|
        within_tolerance: abs_delta <= tolerance
    """

    expected: float
    actual: float
    delta: float
    abs_delta: float
    tolerance: float
    within_tolerance: bool


@dataclass(frozen=True)
class ValidationIssue:
    """First violated math invariant of a plan.

    Attributes:
        reason: Reason code (e.g., "DAILY_CALORIES_MISMATCH")
        diff: Numeric comparison that failed
        day_label: Offending day, for per-day checks
        meal_title: Offending meal, for per-meal checks
    """

    reason: str
    diff: Diff
    day_label: str | None = None
    meal_title: str | None = None


@dataclass(frozen=True)
class UnresolvedExercise:
    day: str
    exercise: str


@dataclass(frozen=True)
class InvalidExerciseIdIssue:
    day: str
    exercise: str
    exercise_id: str | None
    reason: Literal["MISSING_EXERCISE_ID", "UNKNOWN_EXERCISE_ID"]


@dataclass(frozen=True)
class InvalidRecipeIdIssue:
    day: str
    meal_type: str
    title: str
    recipe_id: str | None
    reason: Literal["MISSING_RECIPE_ID", "UNKNOWN_RECIPE_ID"]


@dataclass(frozen=True)
class DayAlignmentIssue:
    index: int
    incoming_date: str | None
    expected_date: str
