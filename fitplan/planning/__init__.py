"""Planning module - validation, repair and deterministic fallback for generated plans.

This module provides:
- Deterministic seeded ranking over catalogs
- Exercise and recipe reference resolution (with variety guard)
- Numeric normalization of nutrition plans
- First-failure math validation
- Retry feedback strings for the next generation attempt
- A catalog-only training plan fallback

Every operation is a pure function of its inputs.
"""

from fitplan.planning.fallback.training import (
    FallbackInput,
    FallbackPolicy,
    build_deterministic_training_fallback_plan,
)
from fitplan.planning.feedback.retry import (
    RetryContext,
    build_meal_kcal_guidance,
    build_retry_feedback,
    build_two_meal_split_retry_instruction,
)
from fitplan.planning.normalize.nutrition import normalize_nutrition_plan
from fitplan.planning.pipeline import repair_nutrition_plan, repair_training_plan
from fitplan.planning.resolution.exercises import (
    find_invalid_training_plan_exercise_ids,
    resolve_training_plan_exercise_ids,
)
from fitplan.planning.resolution.recipes import (
    find_invalid_recipe_ids,
    resolve_recipe_ids,
    resolve_recipe_references,
)
from fitplan.planning.resolution.variety import apply_variety_guard
from fitplan.planning.selection.deterministic import rank
from fitplan.planning.selection.exercise_picker import pick_exercises_for_focus
from fitplan.planning.validate import MacroTargets, NutritionMathConstraints, validate_nutrition_math

__all__ = [
    "FallbackInput",
    "FallbackPolicy",
    "MacroTargets",
    "NutritionMathConstraints",
    "RetryContext",
    "apply_variety_guard",
    "build_deterministic_training_fallback_plan",
    "build_meal_kcal_guidance",
    "build_retry_feedback",
    "build_two_meal_split_retry_instruction",
    "find_invalid_recipe_ids",
    "find_invalid_training_plan_exercise_ids",
    "normalize_nutrition_plan",
    "pick_exercises_for_focus",
    "rank",
    "repair_nutrition_plan",
    "repair_training_plan",
    "resolve_recipe_ids",
    "resolve_recipe_references",
    "resolve_training_plan_exercise_ids",
    "validate_nutrition_math",
]
