"""Nutrition plan numeric normalization.

The model's calories are never trusted: per-meal grams are rounded and
calories are recomputed from them, then day and plan aggregates are derived
from the meals. Normalizing an already normalized plan is a no-op.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fitplan.planning.invariants import (
    KCAL_PER_GRAM_CARBS,
    KCAL_PER_GRAM_FAT,
    KCAL_PER_GRAM_PROTEIN,
    ROUNDING,
)
from fitplan.planning.rounding import round_half_away_from_zero
from fitplan.planning.schema.parsing import parse_nutrition_plan
from fitplan.planning.schema.plan import Macros, Meal, NutritionDay, NutritionPlan


@dataclass(frozen=True)
class DayTotals:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


def macro_calories(protein: float, carbs: float, fats: float) -> float:
    """kcal = protein*4 + carbs*4 + fats*9, rounded to kcal precision."""
    return round_half_away_from_zero(
        protein * KCAL_PER_GRAM_PROTEIN + carbs * KCAL_PER_GRAM_CARBS + fats * KCAL_PER_GRAM_FAT,
        ROUNDING.kcal_decimals,
    )


def normalize_macros(macros: Macros) -> Macros:
    protein = round_half_away_from_zero(macros.protein, ROUNDING.grams_decimals)
    carbs = round_half_away_from_zero(macros.carbs, ROUNDING.grams_decimals)
    fats = round_half_away_from_zero(macros.fats, ROUNDING.grams_decimals)
    return macros.model_copy(
        update={
            "calories": macro_calories(protein, carbs, fats),
            "protein": protein,
            "carbs": carbs,
            "fats": fats,
        },
        deep=True,
    )


def normalize_meal(meal: Meal) -> Meal:
    return meal.model_copy(update={"macros": normalize_macros(meal.macros)}, deep=True)


def compute_day_totals(day: NutritionDay) -> DayTotals:
    """Sum meal macros of one day (no rounding)."""
    calories = protein = carbs = fats = 0.0
    for meal in day.meals:
        calories += meal.macros.calories
        protein += meal.macros.protein
        carbs += meal.macros.carbs
        fats += meal.macros.fats
    return DayTotals(calories=calories, protein=protein, carbs=carbs, fats=fats)


def normalize_nutrition_plan(plan: NutritionPlan | Mapping[str, Any]) -> NutritionPlan:
    """Round meal macros, recompute calories and plan-level daily averages.

    Args:
        plan: Nutrition plan (model or raw document)

    Returns:
        New NutritionPlan where every meal satisfies
        calories == round(protein*4 + carbs*4 + fats*9) and dailyCalories,
        proteinG, carbsG, fatG are averages over max(1, day count)
    """
    nutrition_plan = parse_nutrition_plan(plan)
    days = [
        day.model_copy(update={"meals": [normalize_meal(meal) for meal in day.meals]}, deep=True)
        for day in nutrition_plan.days
    ]

    day_totals = [compute_day_totals(day) for day in days]
    day_count = max(1, len(day_totals))

    return nutrition_plan.model_copy(
        update={
            "days": days,
            "daily_calories": round_half_away_from_zero(
                sum(totals.calories for totals in day_totals) / day_count, ROUNDING.kcal_decimals
            ),
            "protein_g": round_half_away_from_zero(
                sum(totals.protein for totals in day_totals) / day_count, ROUNDING.grams_decimals
            ),
            "carbs_g": round_half_away_from_zero(
                sum(totals.carbs for totals in day_totals) / day_count, ROUNDING.grams_decimals
            ),
            "fat_g": round_half_away_from_zero(
                sum(totals.fats for totals in day_totals) / day_count, ROUNDING.grams_decimals
            ),
        },
        deep=True,
    )
