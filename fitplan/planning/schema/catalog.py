"""Canonical catalogs supplied by the caller per invocation.

Catalog entries are read-only for the pipeline: they are never mutated or
persisted, only referenced.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fitplan.planning.schema.plan import Ingredient


class CatalogModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )


class CatalogRecipe(CatalogModel):
    id: str
    name: str
    description: str | None = None
    calories: float
    protein: float
    carbs: float
    fat: float
    ingredients: list[Ingredient] = Field(default_factory=list)


class CatalogExercise(CatalogModel):
    id: str
    name: str
    image_url: str | None = None
    equipment: str | None = None
    main_muscle_group: str | None = None
