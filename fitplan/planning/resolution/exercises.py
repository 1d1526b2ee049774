"""Exercise Catalog Resolution.

Reconciles exercise references in a generated training plan against the
canonical exercise catalog. A catalog id is authoritative: when it resolves,
the catalog's name and image replace whatever the model wrote. Rows that do
not resolve are kept with a null id and reported, never dropped.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from fitplan.planning.schema.catalog import CatalogExercise
from fitplan.planning.schema.issues import InvalidExerciseIdIssue, UnresolvedExercise
from fitplan.planning.schema.parsing import parse_exercise_catalog, parse_training_plan
from fitplan.planning.schema.plan import TrainingExercise, TrainingPlan
from fitplan.utils.text_utils import normalize_name


@dataclass(frozen=True)
class ExerciseResolutionResult:
    """Resolved plan plus the references that could not be resolved.

    Attributes:
        plan: New TrainingPlan with canonical names/ids where resolved
        unresolved: (day, normalized exercise name) for each unresolved row
    """

    plan: TrainingPlan
    unresolved: list[UnresolvedExercise]


def _index_by_name(catalog: list[CatalogExercise]) -> dict[str, CatalogExercise]:
    by_name: dict[str, CatalogExercise] = {}
    for item in catalog:
        by_name.setdefault(normalize_name(item.name), item)
    return by_name


def resolve_training_plan_exercise_ids(
    plan: TrainingPlan | Mapping[str, Any],
    catalog: Iterable[CatalogExercise | Mapping[str, Any]],
    *,
    match_by_name: bool = False,
) -> ExerciseResolutionResult:
    """Resolve every exercise of a training plan against the catalog.

    Args:
        plan: Training plan (model or raw document)
        catalog: Exercise catalog
        match_by_name: Also resolve rows whose id is missing/unknown by
            normalized name (first catalog entry with that name wins)

    Returns:
        ExerciseResolutionResult with a new plan; exercise count is unchanged
    """
    training_plan = parse_training_plan(plan)
    items = parse_exercise_catalog(catalog)
    by_id = {item.id: item for item in items}
    by_name = _index_by_name(items) if match_by_name else {}

    unresolved: list[UnresolvedExercise] = []
    days = []
    for day in training_plan.days:
        exercises: list[TrainingExercise] = []
        for exercise in day.exercises:
            normalized_name = normalize_name(exercise.name)
            id_candidate = (exercise.exercise_id or "").strip()
            resolved = by_id.get(id_candidate) if id_candidate else None
            if resolved is None and match_by_name:
                resolved = by_name.get(normalized_name)

            if resolved is None:
                unresolved.append(UnresolvedExercise(day=day.label, exercise=normalized_name))
                exercises.append(exercise.model_copy(update={"exercise_id": None, "image_url": None}, deep=True))
                continue

            exercises.append(
                exercise.model_copy(
                    update={"name": resolved.name, "exercise_id": resolved.id, "image_url": resolved.image_url},
                    deep=True,
                )
            )
        days.append(day.model_copy(update={"exercises": exercises}, deep=True))

    if unresolved:
        logger.info(
            "Training plan exercises left unresolved",
            unresolved_count=len(unresolved),
            total_days=len(days),
        )

    return ExerciseResolutionResult(
        plan=training_plan.model_copy(update={"days": days}, deep=True),
        unresolved=unresolved,
    )


def find_invalid_training_plan_exercise_ids(
    plan: TrainingPlan | Mapping[str, Any],
    catalog: Iterable[CatalogExercise | Mapping[str, Any]],
) -> list[InvalidExerciseIdIssue]:
    """Audit exercise ids without modifying the plan.

    Args:
        plan: Training plan (model or raw document)
        catalog: Exercise catalog

    Returns:
        One issue per exercise with a blank id (MISSING_EXERCISE_ID) or an id
        absent from the catalog (UNKNOWN_EXERCISE_ID), in plan order
    """
    training_plan = parse_training_plan(plan)
    valid_ids = {item.id for item in parse_exercise_catalog(catalog)}
    issues: list[InvalidExerciseIdIssue] = []

    for day in training_plan.days:
        for exercise in day.exercises:
            normalized_name = normalize_name(exercise.name)
            candidate = (exercise.exercise_id or "").strip()

            if not candidate:
                issues.append(
                    InvalidExerciseIdIssue(
                        day=day.label,
                        exercise=normalized_name,
                        exercise_id=None,
                        reason="MISSING_EXERCISE_ID",
                    )
                )
                continue

            if candidate not in valid_ids:
                issues.append(
                    InvalidExerciseIdIssue(
                        day=day.label,
                        exercise=normalized_name,
                        exercise_id=candidate,
                        reason="UNKNOWN_EXERCISE_ID",
                    )
                )

    return issues
