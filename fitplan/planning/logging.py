"""Plan Pipeline Observability.

Summary log lines for each pipeline stage. The orchestrator owns metrics;
these only surface resolution counts and the first validation issue.
"""

from loguru import logger

from fitplan.planning.errors import PlanPreconditionError
from fitplan.planning.schema.issues import ValidationIssue


def log_validation_issue(issue: ValidationIssue, context: dict[str, str | int | float | bool | None]) -> None:
    """Log the first failed math check.

    Args:
        issue: Issue returned by the validator
        context: Additional context dictionary for logging
    """
    logger.warning(
        "PLAN_MATH_VALIDATION_FAILED",
        extra={
            "reason": issue.reason,
            "day_label": issue.day_label,
            "meal_title": issue.meal_title,
            "expected": issue.diff.expected,
            "actual": issue.diff.actual,
            "tolerance": issue.diff.tolerance,
            **context,
        },
    )


def log_precondition_failure(err: PlanPreconditionError, context: dict[str, str | int | float | bool | None]) -> None:
    """Log a precondition failure. Call this before re-raising."""
    logger.error(
        "PLAN_PRECONDITION_FAILED",
        extra={
            "code": err.code,
            "details": err.details,
            **context,
        },
    )
