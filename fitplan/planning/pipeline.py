"""Plan repair pipeline.

Composes the pipeline stages in the order the orchestrator runs them after a
generation attempt:

Nutrition: recipe resolution -> variety guard (optional) -> normalization -> math validation
Training: exercise id audit -> exercise resolution

The orchestrator owns retries and the fallback decision; this module only
returns the repaired plan and every diagnostic it needs for that decision.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from fitplan.planning.invariants import DEFAULT_TOLERANCES, MathTolerances
from fitplan.planning.logging import log_validation_issue
from fitplan.planning.normalize.nutrition import normalize_nutrition_plan
from fitplan.planning.resolution.exercises import (
    find_invalid_training_plan_exercise_ids,
    resolve_training_plan_exercise_ids,
)
from fitplan.planning.resolution.recipes import resolve_recipe_references
from fitplan.planning.resolution.variety import VarietyGuardResult, apply_variety_guard
from fitplan.planning.schema.catalog import CatalogExercise, CatalogRecipe
from fitplan.planning.schema.issues import InvalidExerciseIdIssue, UnresolvedExercise, ValidationIssue
from fitplan.planning.schema.parsing import parse_exercise_catalog, parse_recipe_catalog
from fitplan.planning.schema.plan import NutritionPlan, TrainingPlan
from fitplan.planning.validate import NutritionMathConstraints, validate_nutrition_math


@dataclass(frozen=True)
class NutritionRepairResult:
    """Repaired nutrition plan plus diagnostics.

    Attributes:
        plan: Resolved, guarded and normalized plan
        issue: First math violation, None if the plan is valid
        has_catalog: False when the recipe catalog was empty
        fallback_applied: True if any meal got a positional fallback recipe
        invalid_references: Number of unresolved recipe ids
        variety: Variety guard outcome, None when the guard was not requested
    """

    plan: NutritionPlan
    issue: ValidationIssue | None
    has_catalog: bool
    fallback_applied: bool
    invalid_references: int
    variety: VarietyGuardResult | None = None

    @property
    def is_valid(self) -> bool:
        return self.issue is None


@dataclass(frozen=True)
class TrainingRepairResult:
    plan: TrainingPlan
    invalid_ids: list[InvalidExerciseIdIssue]
    unresolved: list[UnresolvedExercise]


def repair_nutrition_plan(
    plan: NutritionPlan | Mapping[str, Any],
    catalog: Iterable[CatalogRecipe | Mapping[str, Any]],
    constraints: NutritionMathConstraints,
    *,
    guarded_meal_types: Sequence[str] | None = None,
    tolerances: MathTolerances = DEFAULT_TOLERANCES,
) -> NutritionRepairResult:
    """Resolve, guard, normalize and validate one generated nutrition plan.

    Args:
        plan: Raw nutrition plan
        catalog: Recipe catalog
        constraints: Generation constraints
        guarded_meal_types: Meal types for the variety guard; None skips the guard
        tolerances: Validator tolerances

    Returns:
        NutritionRepairResult
    """
    recipes = parse_recipe_catalog(catalog)
    resolution = resolve_recipe_references(plan, recipes)
    repaired = resolution.plan

    variety: VarietyGuardResult | None = None
    if guarded_meal_types is not None and resolution.has_catalog:
        variety = apply_variety_guard(repaired, recipes, guarded_meal_types)
        repaired = variety.plan

    normalized = normalize_nutrition_plan(repaired)
    issue = validate_nutrition_math(normalized, constraints, tolerances)

    if issue:
        log_validation_issue(issue, {"invalid_references": resolution.invalid_references})
    else:
        logger.info(
            "Nutrition plan passed math validation",
            days=len(normalized.days),
            invalid_references=resolution.invalid_references,
            variety_replacements=variety.replacements if variety else 0,
        )

    return NutritionRepairResult(
        plan=normalized,
        issue=issue,
        has_catalog=resolution.has_catalog,
        fallback_applied=resolution.fallback_applied,
        invalid_references=resolution.invalid_references,
        variety=variety,
    )


def repair_training_plan(
    plan: TrainingPlan | Mapping[str, Any],
    catalog: Iterable[CatalogExercise | Mapping[str, Any]],
    *,
    match_by_name: bool = False,
) -> TrainingRepairResult:
    """Audit and resolve exercise references of one generated training plan."""
    exercises = parse_exercise_catalog(catalog)
    invalid_ids = find_invalid_training_plan_exercise_ids(plan, exercises)
    resolution = resolve_training_plan_exercise_ids(plan, exercises, match_by_name=match_by_name)

    logger.info(
        "Training plan exercises resolved",
        invalid_ids=len(invalid_ids),
        unresolved=len(resolution.unresolved),
    )

    return TrainingRepairResult(
        plan=resolution.plan,
        invalid_ids=invalid_ids,
        unresolved=resolution.unresolved,
    )
