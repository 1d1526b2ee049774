"""Root conftest for all tests.

Shared catalog and plan builders plus a loguru capture fixture.
"""

import pytest
from loguru import logger

from fitplan.planning.schema.catalog import CatalogExercise, CatalogRecipe


def _build_recipe_catalog(size: int) -> list[CatalogRecipe]:
    """Catalog of `size` recipes with ids rcp_1..rcp_N."""
    return [
        CatalogRecipe(
            id=f"rcp_{index + 1}",
            name=f"Receta {index + 1}",
            description=f"Descripción {index + 1}",
            calories=550 + index,
            protein=30 + index,
            carbs=45 + index,
            fat=18 + index,
            ingredients=[{"name": f"Ingrediente {index + 1}", "grams": 120 + index}],
        )
        for index in range(size)
    ]


def _build_repeated_plan(recipe_id: str, days: int = 7) -> dict:
    """Raw model output repeating one recipe for every lunch and dinner."""
    meal_macros = {"calories": 600, "protein": 40, "carbs": 60, "fats": 20}
    return {
        "title": "Respuesta IA repetitiva",
        "days": [
            {
                "dayLabel": f"Día {index + 1}",
                "meals": [
                    {
                        "type": "lunch",
                        "recipeId": recipe_id,
                        "title": "Receta repetida",
                        "description": None,
                        "macros": dict(meal_macros),
                        "ingredients": None,
                    },
                    {
                        "type": "dinner",
                        "recipeId": recipe_id,
                        "title": "Receta repetida",
                        "description": None,
                        "macros": dict(meal_macros),
                        "ingredients": None,
                    },
                ],
            }
            for index in range(days)
        ],
    }


@pytest.fixture
def build_recipe_catalog():
    """Build a catalog of N recipes with ids rcp_1..rcp_N."""
    return _build_recipe_catalog


@pytest.fixture
def build_repeated_plan():
    """Build a raw plan repeating one recipe for every lunch and dinner."""
    return _build_repeated_plan


@pytest.fixture
def recipe_catalog() -> list[CatalogRecipe]:
    return [
        CatalogRecipe(
            id="rcp_1",
            name="Bowl de avena",
            description="Avena con frutas",
            calories=400,
            protein=20,
            carbs=55,
            fat=10,
            ingredients=[{"name": "Avena", "grams": 80}, {"name": "Fruta", "grams": 120}],
        ),
        CatalogRecipe(
            id="rcp_2",
            name="Pollo con arroz",
            description="Almuerzo clásico",
            calories=650,
            protein=45,
            carbs=70,
            fat=18,
            ingredients=[{"name": "Pollo", "grams": 180}, {"name": "Arroz", "grams": 200}],
        ),
    ]


@pytest.fixture
def exercise_catalog() -> list[CatalogExercise]:
    return [
        CatalogExercise(id="ex_squat", name="Sentadilla goblet", equipment="dumbbell", image_url="squat.png"),
        CatalogExercise(id="ex_lunge", name="Zancadas caminando", equipment="body only"),
        CatalogExercise(id="ex_press", name="Press de banca", equipment="barbell"),
        CatalogExercise(id="ex_pushup", name="Flexiones", equipment="body only", image_url="pushup.png"),
        CatalogExercise(id="ex_row", name="Remo con mancuerna", equipment="dumbbell"),
        CatalogExercise(id="ex_pulldown", name="Jalón al pecho", equipment="cable"),
        CatalogExercise(id="ex_plank", name="Plancha frontal", equipment="body only"),
        CatalogExercise(id="ex_crunch", name="Crunch abdominal", equipment=None),
    ]


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
