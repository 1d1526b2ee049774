"""Accept plan documents and catalogs as models or raw JSON-shaped data."""

from collections.abc import Iterable, Mapping
from typing import Any

from fitplan.planning.schema.catalog import CatalogExercise, CatalogRecipe
from fitplan.planning.schema.plan import NutritionPlan, TrainingPlan


def parse_nutrition_plan(plan: NutritionPlan | Mapping[str, Any]) -> NutritionPlan:
    if isinstance(plan, NutritionPlan):
        return plan
    return NutritionPlan.model_validate(plan)


def parse_training_plan(plan: TrainingPlan | Mapping[str, Any]) -> TrainingPlan:
    if isinstance(plan, TrainingPlan):
        return plan
    return TrainingPlan.model_validate(plan)


def parse_recipe_catalog(catalog: Iterable[CatalogRecipe | Mapping[str, Any]]) -> list[CatalogRecipe]:
    return [item if isinstance(item, CatalogRecipe) else CatalogRecipe.model_validate(item) for item in catalog]


def parse_exercise_catalog(catalog: Iterable[CatalogExercise | Mapping[str, Any]]) -> list[CatalogExercise]:
    return [item if isinstance(item, CatalogExercise) else CatalogExercise.model_validate(item) for item in catalog]
