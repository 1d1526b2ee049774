"""Recipe Catalog Resolution.

Reconciles recipe references in a generated nutrition plan against the
recipe catalog. Whenever a meal ends up pointing at a catalog recipe, its
title, description, macros and ingredients are taken from that recipe so the
text and numbers never disagree with the final recipe id.

Fallback choice is positional: catalog[(day_index + meal_index) % len(catalog)].
It is stable under repeated calls with the same plan shape and catalog order.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from fitplan.planning.invariants import ROUNDING
from fitplan.planning.rounding import round_half_away_from_zero
from fitplan.planning.schema.catalog import CatalogRecipe
from fitplan.planning.schema.issues import InvalidRecipeIdIssue
from fitplan.planning.schema.parsing import parse_nutrition_plan, parse_recipe_catalog
from fitplan.planning.schema.plan import Ingredient, Macros, Meal, NutritionPlan
from fitplan.utils.text_utils import normalize_title


@dataclass(frozen=True)
class RecipeResolutionResult:
    """Outcome of positional recipe resolution.

    Attributes:
        plan: New NutritionPlan
        has_catalog: False when the catalog was empty (no substitution attempted)
        fallback_applied: True if at least one meal got a fallback recipe
        invalid_references: Number of meals whose recipe id did not resolve
    """

    plan: NutritionPlan
    has_catalog: bool
    fallback_applied: bool
    invalid_references: int


@dataclass(frozen=True)
class RecipeIdResolutionResult:
    """Outcome of id/title recipe resolution with calorie scaling.

    Attributes:
        plan: New NutritionPlan (unchanged copy when the catalog is empty)
        invalid_meals: Audit of meals whose id was missing or unknown
        catalog_available: False when the catalog was empty
    """

    plan: NutritionPlan
    invalid_meals: list[InvalidRecipeIdIssue]
    catalog_available: bool


def recipe_macros(recipe: CatalogRecipe) -> Macros:
    return Macros(
        calories=round_half_away_from_zero(recipe.calories, ROUNDING.kcal_decimals),
        protein=round_half_away_from_zero(recipe.protein, ROUNDING.grams_decimals),
        carbs=round_half_away_from_zero(recipe.carbs, ROUNDING.grams_decimals),
        fats=round_half_away_from_zero(recipe.fat, ROUNDING.grams_decimals),
    )


def apply_recipe(meal: Meal, recipe: CatalogRecipe) -> Meal:
    """Return a copy of `meal` whose content comes from `recipe`."""
    return meal.model_copy(
        update={
            "recipe_id": recipe.id,
            "title": recipe.name,
            "description": recipe.description,
            "macros": recipe_macros(recipe),
            "ingredients": [ingredient.model_copy() for ingredient in recipe.ingredients],
        },
        deep=True,
    )


def resolve_recipe_references(
    plan: NutritionPlan | Mapping[str, Any],
    catalog: Iterable[CatalogRecipe | Mapping[str, Any]],
) -> RecipeResolutionResult:
    """Resolve every meal's recipe id, substituting a positional fallback.

    Args:
        plan: Nutrition plan (model or raw document)
        catalog: Recipe catalog

    Returns:
        RecipeResolutionResult. With an empty catalog every recipe id is
        nulled and has_catalog is False.
    """
    nutrition_plan = parse_nutrition_plan(plan)
    recipes = parse_recipe_catalog(catalog)

    if not recipes:
        days = [
            day.model_copy(
                update={"meals": [meal.model_copy(update={"recipe_id": None}, deep=True) for meal in day.meals]},
                deep=True,
            )
            for day in nutrition_plan.days
        ]
        return RecipeResolutionResult(
            plan=nutrition_plan.model_copy(update={"days": days}, deep=True),
            has_catalog=False,
            fallback_applied=False,
            invalid_references=0,
        )

    recipes_by_id = {recipe.id: recipe for recipe in recipes}
    invalid_references = 0
    days = []
    for day_index, day in enumerate(nutrition_plan.days):
        meals: list[Meal] = []
        for meal_index, meal in enumerate(day.meals):
            recipe = recipes_by_id.get(meal.recipe_id) if meal.recipe_id else None
            if recipe is None:
                recipe = recipes[(day_index + meal_index) % len(recipes)]
                invalid_references += 1
            meals.append(apply_recipe(meal, recipe))
        days.append(day.model_copy(update={"meals": meals}, deep=True))

    if invalid_references:
        logger.info(
            "Recipe fallback applied",
            invalid_references=invalid_references,
            catalog_size=len(recipes),
        )

    return RecipeResolutionResult(
        plan=nutrition_plan.model_copy(update={"days": days}, deep=True),
        has_catalog=True,
        fallback_applied=invalid_references > 0,
        invalid_references=invalid_references,
    )


def find_invalid_recipe_ids(
    plan: NutritionPlan | Mapping[str, Any],
    catalog: Iterable[CatalogRecipe | Mapping[str, Any]],
) -> list[InvalidRecipeIdIssue]:
    """Audit meal recipe ids without modifying the plan.

    Returns:
        One issue per meal with no recipe id (MISSING_RECIPE_ID) or an id
        absent from the catalog (UNKNOWN_RECIPE_ID), in plan order
    """
    nutrition_plan = parse_nutrition_plan(plan)
    recipe_ids = {recipe.id for recipe in parse_recipe_catalog(catalog)}
    issues: list[InvalidRecipeIdIssue] = []

    for day in nutrition_plan.days:
        for meal in day.meals:
            if not meal.recipe_id:
                issues.append(
                    InvalidRecipeIdIssue(
                        day=day.day_label,
                        meal_type=meal.type,
                        title=meal.title,
                        recipe_id=None,
                        reason="MISSING_RECIPE_ID",
                    )
                )
                continue
            if meal.recipe_id not in recipe_ids:
                issues.append(
                    InvalidRecipeIdIssue(
                        day=day.day_label,
                        meal_type=meal.type,
                        title=meal.title,
                        recipe_id=meal.recipe_id,
                        reason="UNKNOWN_RECIPE_ID",
                    )
                )

    return issues


def _round_to_nearest_5(value: float) -> float:
    return max(0.0, round_half_away_from_zero(value / 5) * 5)


def scale_recipe(recipe: CatalogRecipe, target_calories: float) -> tuple[Macros, list[Ingredient]]:
    """Scale a recipe to a calorie target.

    Macros are rounded to whole numbers, ingredient grams to the nearest 5.
    A non-positive target keeps the recipe's own portion.
    """
    safe_target = target_calories if target_calories > 0 else recipe.calories
    scale = safe_target / recipe.calories if recipe.calories > 0 else 1.0

    macros = Macros(
        calories=round_half_away_from_zero(recipe.calories * scale),
        protein=round_half_away_from_zero(recipe.protein * scale),
        carbs=round_half_away_from_zero(recipe.carbs * scale),
        fats=round_half_away_from_zero(recipe.fat * scale),
    )
    ingredients = [
        Ingredient(name=ingredient.name, grams=_round_to_nearest_5(ingredient.grams * scale))
        for ingredient in recipe.ingredients
    ]
    return macros, ingredients


def resolve_recipe_ids(
    plan: NutritionPlan | Mapping[str, Any],
    catalog: Iterable[CatalogRecipe | Mapping[str, Any]],
) -> RecipeIdResolutionResult:
    """Resolve meals by id, then by title, then positionally; scale to the meal's kcal.

    Args:
        plan: Nutrition plan (model or raw document)
        catalog: Recipe catalog

    Returns:
        RecipeIdResolutionResult
    """
    nutrition_plan = parse_nutrition_plan(plan)
    recipes = parse_recipe_catalog(catalog)

    if not recipes:
        return RecipeIdResolutionResult(
            plan=nutrition_plan.model_copy(deep=True),
            invalid_meals=[],
            catalog_available=False,
        )

    recipes_by_id = {recipe.id: recipe for recipe in recipes}
    recipes_by_title: dict[str, CatalogRecipe] = {}
    for recipe in recipes:
        recipes_by_title.setdefault(normalize_title(recipe.name), recipe)
    invalid_meals = find_invalid_recipe_ids(nutrition_plan, recipes)

    days = []
    for day_index, day in enumerate(nutrition_plan.days):
        meals: list[Meal] = []
        for meal_index, meal in enumerate(day.meals):
            recipe = recipes_by_id.get(meal.recipe_id) if meal.recipe_id else None
            if recipe is None:
                recipe = recipes_by_title.get(normalize_title(meal.title))
            if recipe is None:
                recipe = recipes[(day_index + meal_index) % len(recipes)]

            macros, ingredients = scale_recipe(recipe, meal.macros.calories)
            meals.append(
                meal.model_copy(
                    update={
                        "recipe_id": recipe.id,
                        "title": recipe.name,
                        "description": recipe.description if recipe.description is not None else meal.description,
                        "macros": macros,
                        "ingredients": ingredients,
                    },
                    deep=True,
                )
            )
        days.append(day.model_copy(update={"meals": meals}, deep=True))

    return RecipeIdResolutionResult(
        plan=nutrition_plan.model_copy(update={"days": days}, deep=True),
        invalid_meals=invalid_meals,
        catalog_available=True,
    )
