"""Nutrition Math Invariants - Single Source of Truth.

Tolerances and rounding precision used by the normalizer and the math
validator. Every numeric comparison rounds both sides to the precision
declared here before subtracting.
"""

from dataclasses import dataclass

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class MathRounding:
    """Decimal precision per field family.

    Attributes:
        kcal_decimals: Precision for calories (kcal)
        grams_decimals: Precision for macro grams
    """

    kcal_decimals: int = 0
    grams_decimals: int = 1


@dataclass(frozen=True)
class MathTolerances:
    """Validator tolerances.

    Attributes:
        daily_kcal_absolute: Minimum daily kcal tolerance
        daily_kcal_relative: Relative daily kcal tolerance (fraction of target)
        macro_grams_absolute: Absolute tolerance for protein/carbs/fats in grams
        two_meal_split_kcal_absolute: Per-meal kcal tolerance for 2-meal days
    """

    daily_kcal_absolute: float = 120
    daily_kcal_relative: float = 0.06
    macro_grams_absolute: float = 12
    two_meal_split_kcal_absolute: float = 80

    def daily_kcal_tolerance(self, expected_kcal: float) -> float:
        return max(self.daily_kcal_absolute, abs(expected_kcal) * self.daily_kcal_relative)


ROUNDING = MathRounding()
DEFAULT_TOLERANCES = MathTolerances()
