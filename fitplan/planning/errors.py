"""Canonical Plan Pipeline Error Types.

Only precondition failures are raised. Unresolved references and numeric
constraint violations are returned as data so the orchestrator can decide
how to recover.

Standard error codes:
- EXERCISE_CATALOG_EMPTY: Deterministic fallback requested without any catalog exercise
- INVALID_FALLBACK_INPUT: Fallback input outside the supported policy tables
"""


class PlanPipelineError(Exception):
    """Base exception for all plan pipeline errors."""

    pass


class PlanPreconditionError(PlanPipelineError):
    """Raised when a pipeline precondition is violated.

    Attributes:
        code: Error code (e.g., "EXERCISE_CATALOG_EMPTY")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str] | None = None):
        self.code = code
        self.details = details or []
        super().__init__(f"{code}: {self.details}" if self.details else code)


class ExerciseCatalogEmptyError(PlanPreconditionError):
    """Raised when exercises are requested from an empty catalog."""

    def __init__(self, details: list[str] | None = None):
        super().__init__("EXERCISE_CATALOG_EMPTY", details)
