"""Recipe Resolution Tests.

Tests cover:
- Positional fallback for missing/unknown ids
- Content adoption from the final recipe
- Empty catalog behavior
- Invalid id audit
- Id/title resolution with calorie scaling
"""

import pytest
from pydantic import ValidationError

from fitplan.planning.resolution.recipes import (
    find_invalid_recipe_ids,
    resolve_recipe_ids,
    resolve_recipe_references,
    scale_recipe,
)
from fitplan.planning.schema.catalog import CatalogRecipe
from fitplan.planning.schema.issues import InvalidRecipeIdIssue
from fitplan.planning.schema.plan import Ingredient, NutritionPlan


def _nutrition_plan() -> dict:
    return {
        "title": "Plan nutricional",
        "dailyCalories": 1050,
        "days": [
            {
                "dayLabel": "Lunes",
                "meals": [
                    {
                        "type": "breakfast",
                        "title": "Avena",
                        "recipeId": "rcp_1",
                        "macros": {"calories": 380, "protein": 18, "carbs": 50, "fats": 9},
                    },
                    {
                        "type": "lunch",
                        "title": "Algo inventado",
                        "macros": {"calories": 700, "protein": 40, "carbs": 80, "fats": 20},
                    },
                ],
            },
            {
                "dayLabel": "Martes",
                "meals": [
                    {
                        "type": "lunch",
                        "title": "Otra cosa",
                        "recipeId": "rcp_missing",
                        "macros": {"calories": 600, "protein": 35, "carbs": 60, "fats": 20},
                    },
                ],
            },
        ],
    }


def test_valid_ids_adopt_recipe_content(recipe_catalog):
    result = resolve_recipe_references(_nutrition_plan(), recipe_catalog)
    breakfast = result.plan.days[0].meals[0]
    assert breakfast.recipe_id == "rcp_1"
    assert breakfast.title == "Bowl de avena"
    assert breakfast.description == "Avena con frutas"
    assert breakfast.macros.calories == 400
    assert breakfast.macros.fats == 10
    assert [ingredient.name for ingredient in breakfast.ingredients] == ["Avena", "Fruta"]


def test_positional_fallback(recipe_catalog):
    """Test that unresolved meals get catalog[(day + meal) % n]."""
    result = resolve_recipe_references(_nutrition_plan(), recipe_catalog)
    assert result.plan.days[0].meals[1].recipe_id == "rcp_2"
    assert result.plan.days[1].meals[0].recipe_id == "rcp_2"
    assert result.plan.days[1].meals[0].title == "Pollo con arroz"
    assert result.plan.days[1].meals[0].macros.calories == 650
    assert result.has_catalog is True
    assert result.fallback_applied is True
    assert result.invalid_references == 2


def test_fallback_is_stable(recipe_catalog):
    first = resolve_recipe_references(_nutrition_plan(), recipe_catalog)
    second = resolve_recipe_references(_nutrition_plan(), recipe_catalog)
    assert first.plan == second.plan


def test_no_fallback_when_all_ids_resolve(recipe_catalog):
    plan = _nutrition_plan()
    plan["days"][0]["meals"][1]["recipeId"] = "rcp_2"
    plan["days"][1]["meals"][0]["recipeId"] = "rcp_1"
    result = resolve_recipe_references(plan, recipe_catalog)
    assert result.fallback_applied is False
    assert result.invalid_references == 0


def test_empty_catalog_nulls_recipe_ids():
    result = resolve_recipe_references(_nutrition_plan(), [])
    assert result.has_catalog is False
    assert result.fallback_applied is False
    assert all(meal.recipe_id is None for day in result.plan.days for meal in day.meals)
    assert result.plan.days[0].meals[1].title == "Algo inventado"


def test_input_plan_is_not_mutated(recipe_catalog):
    plan = NutritionPlan.model_validate(_nutrition_plan())
    resolve_recipe_references(plan, recipe_catalog)
    assert plan.days[1].meals[0].recipe_id == "rcp_missing"
    assert plan.days[0].meals[0].title == "Avena"


def test_find_invalid_recipe_ids(recipe_catalog):
    assert find_invalid_recipe_ids(_nutrition_plan(), recipe_catalog) == [
        InvalidRecipeIdIssue(
            day="Lunes",
            meal_type="lunch",
            title="Algo inventado",
            recipe_id=None,
            reason="MISSING_RECIPE_ID",
        ),
        InvalidRecipeIdIssue(
            day="Martes",
            meal_type="lunch",
            title="Otra cosa",
            recipe_id="rcp_missing",
            reason="UNKNOWN_RECIPE_ID",
        ),
    ]


def test_recipe_macros_are_rounded():
    catalog = [
        CatalogRecipe(id="rcp_x", name="Tortilla", calories=412.5, protein=20.25, carbs=10.04, fat=30.75),
    ]
    plan = {"days": [{"dayLabel": "Lunes", "meals": [{"type": "dinner", "title": "Tortilla"}]}]}
    meal = resolve_recipe_references(plan, catalog).plan.days[0].meals[0]
    assert meal.macros.calories == 413
    assert meal.macros.protein == 20.3
    assert meal.macros.carbs == 10.0
    assert meal.macros.fats == 30.8


def test_scale_recipe(recipe_catalog):
    macros, ingredients = scale_recipe(recipe_catalog[1], 325)
    assert macros.calories == 325
    assert macros.protein == 23
    assert macros.carbs == 35
    assert macros.fats == 9
    assert ingredients == [Ingredient(name="Pollo", grams=90), Ingredient(name="Arroz", grams=100)]


@pytest.mark.parametrize("target", [0, -50])
def test_scale_recipe_keeps_portion_for_non_positive_target(recipe_catalog, target):
    macros, ingredients = scale_recipe(recipe_catalog[1], target)
    assert macros.calories == 650
    assert [ingredient.grams for ingredient in ingredients] == [180, 200]


def test_resolve_recipe_ids_matches_title(recipe_catalog):
    plan = {
        "days": [
            {
                "dayLabel": "Lunes",
                "meals": [
                    {"type": "lunch", "title": "pollo con ARROZ!", "macros": {"calories": 325}},
                ],
            }
        ]
    }
    result = resolve_recipe_ids(plan, recipe_catalog)
    meal = result.plan.days[0].meals[0]
    assert result.catalog_available is True
    assert meal.recipe_id == "rcp_2"
    assert meal.title == "Pollo con arroz"
    assert meal.macros.calories == 325
    assert [issue.reason for issue in result.invalid_meals] == ["MISSING_RECIPE_ID"]


def test_resolve_recipe_ids_prefers_id_and_falls_back_by_position(recipe_catalog):
    result = resolve_recipe_ids(_nutrition_plan(), recipe_catalog)
    days = result.plan.days
    assert days[0].meals[0].recipe_id == "rcp_1"
    assert days[0].meals[0].macros.calories == 380
    assert days[0].meals[1].recipe_id == "rcp_2"
    assert days[1].meals[0].recipe_id == "rcp_2"
    assert len(result.invalid_meals) == 2


def test_resolve_recipe_ids_without_catalog():
    result = resolve_recipe_ids(_nutrition_plan(), [])
    assert result.catalog_available is False
    assert result.invalid_meals == []
    assert result.plan == NutritionPlan.model_validate(_nutrition_plan())


def test_non_finite_catalog_values_are_rejected():
    with pytest.raises(ValidationError):
        resolve_recipe_references(
            _nutrition_plan(),
            [{"id": "rcp_nan", "name": "Roto", "calories": "NaN", "protein": 1, "carbs": 1, "fat": 1}],
        )
