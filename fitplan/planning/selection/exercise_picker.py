"""Deterministic exercise picking for a day focus.

Used by the deterministic fallback builder. The catalog is ranked with the
focus label as seed, filtered by training environment, and split into
pattern matches (primary) and everything else (fallback).
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal

from fitplan.planning.errors import ExerciseCatalogEmptyError
from fitplan.planning.schema.catalog import CatalogExercise
from fitplan.planning.selection.deterministic import rank
from fitplan.utils.text_utils import normalize_name

Environment = Literal["home", "gym"]

FOCUS_PATTERNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "leg": (
        "sentadilla", "prensa", "zancada", "lunge", "femoral", "cuadricep", "quad",
        "glute", "pantorr", "hip thrust", "peso muerto", "squat", "deadlift", "calf",
    ),
    "push": (
        "press", "flexion", "fondo", "tricep", "hombro", "militar", "apertura",
        "elevacion lateral", "push", "dip", "fly",
    ),
    "pull": ("remo", "dominada", "jalon", "curl", "bicep", "espalda", "face pull", "row", "pull"),
    "core": ("plancha", "abdominal", "crunch", "core", "russian twist", "hollow", "plank"),
})

# Focus keyword -> FOCUS_PATTERNS key, checked in order
FOCUS_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("pierna", "leg"), "leg"),
    (("empu", "push"), "push"),
    (("tiron", "pull"), "pull"),
    (("core", "abs"), "core"),
)

HOME_EQUIPMENT_KEYWORDS: tuple[str, ...] = (
    "body", "peso corporal", "none", "ninguno", "band", "banda", "dumbbell", "mancuerna", "kettlebell",
)


def patterns_for_focus(focus: str, patterns: Mapping[str, tuple[str, ...]] = FOCUS_PATTERNS) -> tuple[str, ...]:
    """Keyword patterns matching a focus label; empty for mixed/full-body focus."""
    normalized_focus = normalize_name(focus)
    for keywords, key in FOCUS_KEYWORDS:
        if any(keyword in normalized_focus for keyword in keywords):
            return patterns.get(key, ())
    return ()


def is_home_friendly(exercise: CatalogExercise) -> bool:
    if not exercise.equipment:
        return True
    equipment = normalize_name(exercise.equipment)
    return any(keyword in equipment for keyword in HOME_EQUIPMENT_KEYWORDS)


def filter_by_environment(catalog: list[CatalogExercise], environment: Environment | None) -> list[CatalogExercise]:
    """Keep exercises doable in the environment.

    If the filter eliminates every candidate it is dropped and the input is
    returned unchanged.
    """
    if environment != "home":
        return list(catalog)
    filtered = [exercise for exercise in catalog if is_home_friendly(exercise)]
    return filtered or list(catalog)


def _unique_by_id(exercises: list[CatalogExercise]) -> list[CatalogExercise]:
    seen: set[str] = set()
    unique: list[CatalogExercise] = []
    for exercise in exercises:
        if exercise.id in seen:
            continue
        seen.add(exercise.id)
        unique.append(exercise)
    return unique


def pick_exercises_for_focus(
    catalog: list[CatalogExercise],
    focus: str,
    count: int,
    *,
    environment: Environment | None = None,
    patterns: Mapping[str, tuple[str, ...]] = FOCUS_PATTERNS,
) -> list[CatalogExercise]:
    """Pick `count` exercises for a day focus.

    Args:
        catalog: Exercise catalog
        focus: Day focus label, also used as the ranking seed
        count: Number of exercises requested
        environment: "home" restricts to home-friendly equipment
        patterns: Focus keyword patterns

    Returns:
        Exactly `count` exercises; cycled round-robin when the catalog is short

    Raises:
        ExerciseCatalogEmptyError: If the catalog is empty
    """
    if not catalog:
        raise ExerciseCatalogEmptyError([f"focus={focus}"])
    if count <= 0:
        return []

    ordered = filter_by_environment(rank(catalog, focus), environment)
    focus_patterns = patterns_for_focus(focus, patterns)

    primary = [
        exercise
        for exercise in ordered
        if any(pattern in normalize_name(exercise.name) for pattern in focus_patterns)
    ]
    primary_ids = {exercise.id for exercise in primary}
    fallback = [exercise for exercise in ordered if exercise.id not in primary_ids]
    selection = _unique_by_id(primary + fallback)[:count]

    if len(selection) >= count:
        return selection

    cycled = list(selection)
    index = 0
    while len(cycled) < count:
        cycled.append(selection[index % len(selection)])
        index += 1
    return cycled
