from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fitplan.planning.invariants import MathTolerances


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="FITPLAN_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="FITPLAN_LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="FITPLAN_LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="FITPLAN_LOG_RETENTION")
    variety_guard_meal_types: list[str] = Field(
        default_factory=lambda: ["lunch", "dinner"],
        validation_alias="FITPLAN_VARIETY_GUARD_MEAL_TYPES",
        description="Meal types the variety guard keeps distinct (JSON list)",
    )
    daily_kcal_absolute: float = Field(default=120, validation_alias="FITPLAN_DAILY_KCAL_ABSOLUTE")
    daily_kcal_relative: float = Field(default=0.06, validation_alias="FITPLAN_DAILY_KCAL_RELATIVE")
    macro_grams_absolute: float = Field(default=12, validation_alias="FITPLAN_MACRO_GRAMS_ABSOLUTE")
    two_meal_split_kcal_absolute: float = Field(default=80, validation_alias="FITPLAN_TWO_MEAL_SPLIT_KCAL_ABSOLUTE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FITPLAN_",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("daily_kcal_absolute", "daily_kcal_relative", "macro_grams_absolute", "two_meal_split_kcal_absolute")
    @classmethod
    def validate_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("tolerances must be >= 0")
        return value

    def math_tolerances(self) -> MathTolerances:
        return MathTolerances(
            daily_kcal_absolute=self.daily_kcal_absolute,
            daily_kcal_relative=self.daily_kcal_relative,
            macro_grams_absolute=self.macro_grams_absolute,
            two_meal_split_kcal_absolute=self.two_meal_split_kcal_absolute,
        )


def get_settings() -> Settings:
    """Read settings from the environment (and .env) on each call."""
    return Settings()
