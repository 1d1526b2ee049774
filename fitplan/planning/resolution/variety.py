"""Recipe Variety Guard.

The upstream model tends to repeat one recipe for every lunch and dinner of
the week. This repair pass re-assigns repeated guarded slots to distinct
catalog recipes.

Rules:
- A guarded slot keeps its recipe when the id is in the catalog and used
  exactly once across the week's guarded slots. Every other guarded slot
  (repeated, unknown or missing id) is re-assigned.
- Slots are processed in day/meal order. Candidates are the catalog ranked
  by the deterministic selector with seed "<seed>:<day_index>:<meal_type>".
- Ids already used in the same day are skipped whenever another candidate
  exists, then the candidate with the lowest weekly usage wins (ties by rank).
- Ids that were repeated in the input start with a usage of one, so they are
  picked last.
"""

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from fitplan.planning.resolution.recipes import apply_recipe
from fitplan.planning.schema.catalog import CatalogRecipe
from fitplan.planning.schema.parsing import parse_nutrition_plan, parse_recipe_catalog
from fitplan.planning.schema.plan import NutritionPlan
from fitplan.planning.selection.deterministic import rank

DEFAULT_GUARDED_MEAL_TYPES: tuple[str, ...] = ("lunch", "dinner")


@dataclass(frozen=True)
class VarietyGuardResult:
    """Outcome of the variety guard.

    Attributes:
        plan: New NutritionPlan
        variety_guard_applied: True if at least one slot changed recipe
        replacements: Number of guarded slots whose recipe id changed
        unique_recipe_ids_week: Distinct recipe ids across guarded slots after the guard
        had_enough_unique_recipes: Catalog size >= number of guarded slots
    """

    plan: NutritionPlan
    variety_guard_applied: bool
    replacements: int
    unique_recipe_ids_week: int
    had_enough_unique_recipes: bool


def _pick_recipe(
    ranked: list[CatalogRecipe],
    usage: Counter[str],
    day_used: set[str],
) -> CatalogRecipe:
    candidates = [recipe for recipe in ranked if recipe.id not in day_used] or ranked
    best_index = min(range(len(candidates)), key=lambda index: (usage[candidates[index].id], index))
    return candidates[best_index]


def apply_variety_guard(
    plan: NutritionPlan | Mapping[str, Any],
    catalog: Iterable[CatalogRecipe | Mapping[str, Any]],
    guarded_meal_types: Sequence[str] = DEFAULT_GUARDED_MEAL_TYPES,
    *,
    seed: str = "variety",
) -> VarietyGuardResult:
    """Re-assign repeated recipes in guarded meal slots.

    Args:
        plan: Nutrition plan (model or raw document)
        catalog: Recipe catalog
        guarded_meal_types: Meal types subject to the guard
        seed: Base seed for candidate ranking

    Returns:
        VarietyGuardResult
    """
    nutrition_plan = parse_nutrition_plan(plan)
    recipes = parse_recipe_catalog(catalog)
    guarded = set(guarded_meal_types)

    slots = [
        (day_index, meal_index)
        for day_index, day in enumerate(nutrition_plan.days)
        for meal_index, meal in enumerate(day.meals)
        if meal.type in guarded
    ]

    if not recipes:
        slot_ids = {nutrition_plan.days[d].meals[m].recipe_id for d, m in slots}
        slot_ids.discard(None)
        return VarietyGuardResult(
            plan=nutrition_plan.model_copy(deep=True),
            variety_guard_applied=False,
            replacements=0,
            unique_recipe_ids_week=len(slot_ids),
            had_enough_unique_recipes=False,
        )

    recipes_by_id = {recipe.id: recipe for recipe in recipes}
    input_counts = Counter(
        nutrition_plan.days[d].meals[m].recipe_id for d, m in slots if nutrition_plan.days[d].meals[m].recipe_id
    )

    assigned: dict[tuple[int, int], str] = {}
    to_replace: list[tuple[int, int]] = []
    for slot in slots:
        recipe_id = nutrition_plan.days[slot[0]].meals[slot[1]].recipe_id
        if recipe_id in recipes_by_id and input_counts[recipe_id] == 1:
            assigned[slot] = recipe_id
        else:
            to_replace.append(slot)

    usage: Counter[str] = Counter(assigned.values())
    for recipe_id, count in input_counts.items():
        if count > 1:
            usage[recipe_id] += 1

    for day_index, meal_index in to_replace:
        meal = nutrition_plan.days[day_index].meals[meal_index]
        day_used = {recipe_id for (d, _), recipe_id in assigned.items() if d == day_index}
        ranked = rank(recipes, f"{seed}:{day_index}:{meal.type}")
        chosen = _pick_recipe(ranked, usage, day_used)
        assigned[(day_index, meal_index)] = chosen.id
        usage[chosen.id] += 1

    replacements = 0
    days = []
    for day_index, day in enumerate(nutrition_plan.days):
        meals = []
        for meal_index, meal in enumerate(day.meals):
            recipe_id = assigned.get((day_index, meal_index))
            if recipe_id is None:
                meals.append(meal.model_copy(deep=True))
                continue
            if recipe_id != meal.recipe_id:
                replacements += 1
            meals.append(apply_recipe(meal, recipes_by_id[recipe_id]))
        days.append(day.model_copy(update={"meals": meals}, deep=True))

    unique_recipe_ids_week = len(set(assigned.values()))
    had_enough_unique_recipes = len(recipes) >= len(slots)

    logger.info(
        "Variety guard evaluated",
        guarded_slots=len(slots),
        replacements=replacements,
        unique_recipe_ids_week=unique_recipe_ids_week,
        had_enough_unique_recipes=had_enough_unique_recipes,
    )

    return VarietyGuardResult(
        plan=nutrition_plan.model_copy(update={"days": days}, deep=True),
        variety_guard_applied=replacements > 0,
        replacements=replacements,
        unique_recipe_ids_week=unique_recipe_ids_week,
        had_enough_unique_recipes=had_enough_unique_recipes,
    )
