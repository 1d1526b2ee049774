"""Plan documents - Pipeline Input & Output.

Training and nutrition plans as returned by the generative model. Fields are
parsed from camelCase JSON (recipeId, dayLabel, dailyCalories, ...) and
dumped back with model_dump(by_alias=True). Unknown keys are preserved so the
output has the same shape as the input.

Models are frozen: pipeline stages build new instances instead of mutating.
Non-finite numbers (NaN, infinity) are rejected at parse time.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class PlanModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
        allow_inf_nan=False,
    )


class Macros(PlanModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


class Ingredient(PlanModel):
    name: str
    grams: float


class Meal(PlanModel):
    type: MealType
    title: str
    description: str | None = None
    recipe_id: str | None = None
    macros: Macros = Field(default_factory=Macros)
    ingredients: list[Ingredient] | None = None


class NutritionDay(PlanModel):
    day_label: str
    date: str | None = None
    meals: list[Meal] = Field(default_factory=list)


class NutritionPlan(PlanModel):
    title: str = ""
    start_date: str | None = None
    daily_calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    days: list[NutritionDay] = Field(default_factory=list)
    shopping_list: list[Ingredient] | None = None


class TrainingExercise(PlanModel):
    name: str
    exercise_id: str | None = None
    image_url: str | None = None
    sets: int | None = None
    reps: str | int | None = None
    tempo: str | None = None
    rest: int | None = None
    notes: str | None = None


class TrainingDay(PlanModel):
    label: str
    date: str | None = None
    focus: str | None = None
    duration: int | None = None
    exercises: list[TrainingExercise] = Field(default_factory=list)


class TrainingPlan(PlanModel):
    title: str = ""
    notes: str | None = None
    start_date: str | None = None
    days: list[TrainingDay] = Field(default_factory=list)
