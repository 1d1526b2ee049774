"""Deterministic Training Fallback Builder.

Used when repeated generation/validation cycles fail. Builds a complete,
schedulable training plan from the exercise catalog and the deterministic
selector alone, with no model call.

Policy tables (sets, reps, rest, exercise count, duration) are plain
lookups held in an immutable FallbackPolicy passed into the builder.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from types import MappingProxyType
from typing import Any, Literal

from loguru import logger

from fitplan.planning.errors import ExerciseCatalogEmptyError, PlanPreconditionError
from fitplan.planning.logging import log_precondition_failure
from fitplan.planning.schema.catalog import CatalogExercise
from fitplan.planning.schema.parsing import parse_exercise_catalog
from fitplan.planning.schema.plan import TrainingDay, TrainingExercise, TrainingPlan
from fitplan.planning.selection.exercise_picker import FOCUS_PATTERNS, Environment, pick_exercises_for_focus

TrainingLevel = Literal["beginner", "intermediate", "advanced"]
TrainingGoal = Literal["cut", "maintain", "bulk"]

DAY_FOCUS_ORDER: tuple[str, ...] = (
    "Pierna + Core",
    "Empuje (Pecho/Hombro/Tríceps)",
    "Tirón (Espalda/Bíceps)",
    "Pierna posterior + Glúteo",
    "Torso mixto",
    "Condicionamiento + Core",
    "Full body técnico",
)

# Days between consecutive sessions
SESSION_SPACING_DAYS = 2

FALLBACK_TITLE = "Plan de entrenamiento (fallback biblioteca)"
FALLBACK_NOTES = "Generado automáticamente desde biblioteca local por fallo temporal de IA."
EXERCISE_NOTES = "Prioriza técnica y rango completo."


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(mapping)


@dataclass(frozen=True)
class FallbackPolicy:
    """Lookup tables for fallback sessions.

    Attributes:
        exercise_count: Exercises per session by level
        sets: Sets per exercise by level
        reps: Rep range by goal
        rest_seconds: Rest between sets by goal
        duration_minutes: Session duration by level
        tempo: Tempo prescription for every exercise
        day_focus_order: Focus labels cycled by day index
        focus_patterns: Keyword patterns used to match catalog names
    """

    exercise_count: Mapping[str, int] = field(
        default_factory=lambda: _frozen({"beginner": 3, "intermediate": 4, "advanced": 5})
    )
    sets: Mapping[str, int] = field(default_factory=lambda: _frozen({"beginner": 3, "intermediate": 3, "advanced": 4}))
    reps: Mapping[str, str] = field(default_factory=lambda: _frozen({"bulk": "6-10", "cut": "10-15", "maintain": "8-12"}))
    rest_seconds: Mapping[str, int] = field(default_factory=lambda: _frozen({"bulk": 120, "cut": 60, "maintain": 90}))
    duration_minutes: Mapping[str, int] = field(
        default_factory=lambda: _frozen({"beginner": 50, "intermediate": 60, "advanced": 70})
    )
    tempo: str = "2-0-2"
    day_focus_order: tuple[str, ...] = DAY_FOCUS_ORDER
    focus_patterns: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: FOCUS_PATTERNS)


DEFAULT_FALLBACK_POLICY = FallbackPolicy()


@dataclass(frozen=True)
class FallbackInput:
    """User preferences driving the fallback plan.

    Attributes:
        days_per_week: Number of sessions to build
        level: Training level
        goal: Training goal
        start_date: Date of the first session
        environment: "home" restricts equipment; None or "gym" allows all
    """

    days_per_week: int
    level: TrainingLevel
    goal: TrainingGoal
    start_date: date
    environment: Environment | None = None


def focus_for_day(day_index: int, policy: FallbackPolicy = DEFAULT_FALLBACK_POLICY) -> str:
    return policy.day_focus_order[day_index % len(policy.day_focus_order)]


def _check_input(fallback_input: FallbackInput, policy: FallbackPolicy) -> None:
    details: list[str] = []
    if fallback_input.level not in policy.exercise_count:
        details.append(f"unsupported level: {fallback_input.level}")
    if fallback_input.goal not in policy.reps:
        details.append(f"unsupported goal: {fallback_input.goal}")
    if fallback_input.days_per_week < 0:
        details.append(f"days_per_week must be >= 0, got {fallback_input.days_per_week}")
    if details:
        raise PlanPreconditionError("INVALID_FALLBACK_INPUT", details)


def build_deterministic_training_fallback_plan(
    fallback_input: FallbackInput,
    catalog: Iterable[CatalogExercise | Mapping[str, Any]],
    *,
    policy: FallbackPolicy = DEFAULT_FALLBACK_POLICY,
) -> TrainingPlan:
    """Build a training plan from the catalog with no generative model.

    Args:
        fallback_input: Days per week, level, goal, start date, environment
        catalog: Exercise catalog
        policy: Lookup tables for the generated sessions

    Returns:
        TrainingPlan with one day per session, dated every other day

    Raises:
        ExerciseCatalogEmptyError: If the catalog is empty
        PlanPreconditionError: If level/goal are not covered by the policy
    """
    items = parse_exercise_catalog(catalog)
    try:
        if not items:
            raise ExerciseCatalogEmptyError([f"days_per_week={fallback_input.days_per_week}"])
        _check_input(fallback_input, policy)
    except PlanPreconditionError as err:
        log_precondition_failure(err, {"level": fallback_input.level, "goal": fallback_input.goal})
        raise

    count = policy.exercise_count[fallback_input.level]
    days: list[TrainingDay] = []
    for index in range(fallback_input.days_per_week):
        focus = focus_for_day(index, policy)
        selected = pick_exercises_for_focus(
            items,
            focus,
            count,
            environment=fallback_input.environment,
            patterns=policy.focus_patterns,
        )
        exercises = [
            TrainingExercise(
                name=exercise.name,
                exercise_id=exercise.id,
                image_url=exercise.image_url,
                sets=policy.sets[fallback_input.level],
                reps=policy.reps[fallback_input.goal],
                tempo=policy.tempo,
                rest=policy.rest_seconds[fallback_input.goal],
                notes=EXERCISE_NOTES,
            )
            for exercise in selected
        ]
        session_date = fallback_input.start_date + timedelta(days=index * SESSION_SPACING_DAYS)
        days.append(
            TrainingDay(
                label=f"Día {index + 1}",
                date=session_date.isoformat(),
                focus=focus,
                duration=policy.duration_minutes[fallback_input.level],
                exercises=exercises,
            )
        )

    logger.info(
        "Deterministic training fallback built",
        days=len(days),
        level=fallback_input.level,
        goal=fallback_input.goal,
        catalog_size=len(items),
    )

    return TrainingPlan(
        title=FALLBACK_TITLE,
        notes=FALLBACK_NOTES,
        start_date=fallback_input.start_date.isoformat(),
        days=days,
    )
