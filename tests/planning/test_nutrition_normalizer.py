"""Tests for nutrition plan numeric normalization."""

import pytest
from pydantic import ValidationError

from fitplan.planning.normalize.nutrition import (
    compute_day_totals,
    macro_calories,
    normalize_nutrition_plan,
)
from fitplan.planning.schema.plan import NutritionPlan


def _plan() -> dict:
    return {
        "title": "Plan",
        "dailyCalories": 9999,
        "days": [
            {
                "dayLabel": "Lunes",
                "meals": [
                    {
                        "type": "lunch",
                        "title": "Comida",
                        "macros": {"calories": 10, "protein": 30.04, "carbs": 50.06, "fats": 10.25},
                    },
                    {
                        "type": "dinner",
                        "title": "Cena",
                        "macros": {"calories": 0, "protein": 40, "carbs": 60, "fats": 20},
                    },
                ],
            },
            {
                "dayLabel": "Martes",
                "meals": [
                    {
                        "type": "lunch",
                        "title": "Comida",
                        "macros": {"calories": 700, "protein": 50, "carbs": 70.3, "fats": 20.1},
                    },
                ],
            },
        ],
    }


@pytest.mark.parametrize(
    ("protein", "carbs", "fats", "expected"),
    [
        (0, 0, 0, 0),
        (40, 60, 20, 580),
        (30.0, 50.1, 10.3, 413),
    ],
)
def test_macro_calories(protein, carbs, fats, expected):
    assert macro_calories(protein, carbs, fats) == expected


def test_meal_calories_recomputed_from_rounded_grams():
    plan = normalize_nutrition_plan(_plan())
    macros = plan.days[0].meals[0].macros
    assert macros.protein == 30.0
    assert macros.carbs == 50.1
    assert macros.fats == 10.3
    assert macros.calories == 413
    assert plan.days[0].meals[1].macros.calories == 580


def test_every_meal_satisfies_calorie_identity():
    """Test calories == round(p*4 + c*4 + f*9) after normalization."""
    plan = normalize_nutrition_plan(_plan())
    for day in plan.days:
        for meal in day.meals:
            macros = meal.macros
            assert macros.calories == macro_calories(macros.protein, macros.carbs, macros.fats)


def test_plan_level_values_are_daily_averages():
    plan = normalize_nutrition_plan(_plan())
    # Lunes: 413 + 580 = 993, Martes: 200 + 281.2 + 180.9 = 662
    assert plan.daily_calories == 828
    assert plan.protein_g == 60.0
    assert plan.carbs_g == 90.2
    assert plan.fat_g == 25.2


def test_normalization_is_idempotent():
    once = normalize_nutrition_plan(_plan())
    twice = normalize_nutrition_plan(once)
    assert twice == once


def test_plan_without_days():
    plan = normalize_nutrition_plan({"title": "Vacío", "dailyCalories": 2000, "days": []})
    assert plan.days == []
    assert plan.daily_calories == 0
    assert plan.protein_g == 0


def test_input_is_not_mutated():
    plan = NutritionPlan.model_validate(_plan())
    normalize_nutrition_plan(plan)
    assert plan.days[0].meals[0].macros.calories == 10
    assert plan.daily_calories == 9999


def test_extra_fields_are_preserved():
    raw = _plan()
    raw["notes"] = "sin lactosa"
    raw["days"][0]["meals"][0]["prepMinutes"] = 15
    dumped = normalize_nutrition_plan(raw).model_dump(by_alias=True)
    assert dumped["notes"] == "sin lactosa"
    assert dumped["days"][0]["meals"][0]["prepMinutes"] == 15
    assert "dailyCalories" in dumped


def test_compute_day_totals_sums_without_rounding():
    plan = NutritionPlan.model_validate(_plan())
    totals = compute_day_totals(plan.days[0])
    assert totals.calories == 10
    assert totals.protein == pytest.approx(70.04)
    assert totals.fats == pytest.approx(30.25)


@pytest.mark.parametrize("value", ["NaN", float("nan"), float("inf"), "-Infinity"])
def test_non_finite_macros_are_rejected(value):
    raw = _plan()
    raw["days"][0]["meals"][0]["macros"]["protein"] = value
    with pytest.raises(ValidationError):
        normalize_nutrition_plan(raw)
