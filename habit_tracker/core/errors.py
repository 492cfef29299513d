"""Error Hierarchy — typed, categorized exceptions for all habit tracker failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Only two domain failures exist: validation (400) and not-found (404)
    - to_response() produces the REST envelope
    - The store never raises these; classification happens in the service layer

Design Decisions:
    - Single hierarchy with HabitTrackerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - No retry metadata: every failure is immediate and synchronous
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

from habit_tracker.core.domain_types import HabitId


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    habit_id: HabitId | None = None
    field: str | None = None


class HabitTrackerError(Exception):
    """Base exception for all habit tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "habit_id": self.context.habit_id,
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class HabitValidationError(HabitTrackerError):
    """A habit field (or operation argument) holds an invalid value."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class HabitNotFoundError(HabitTrackerError):
    """Operation referenced a habit id that does not exist."""
    def __init__(self, habit_id: HabitId, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.habit_id = habit_id
        super().__init__(
            f"Habit {habit_id} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.habit_id = habit_id
