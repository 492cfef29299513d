"""Habit Validation — gatekeeper run before any habit reaches the store.

Invariants:
    - Rules are checked in a fixed order; the FIRST violation is raised
      (habit present → name → frequency → target_per_week → streaks →
      name length → description length → last_completed → created_at)
    - On success the name is trimmed IN PLACE (the only mutation)
    - A rejected habit is never persisted (callers validate before saving)
    - Limits come from core/domain_types.py, shared with the request schema

Design Decisions:
    - Raise HabitValidationError instead of returning an error dict: the service
      propagates it unchanged to the HTTP shell
    - Length and no-future checks are repeated here so non-HTTP callers of the
      service get the same guarantees as the request schema
"""

from datetime import date, datetime

from habit_tracker.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, MAX_TARGET_PER_WEEK, MIN_TARGET_PER_WEEK, NAME_MAX_LENGTH,
)
from habit_tracker.core.errors import HabitValidationError
from habit_tracker.core.habit import Habit


def validate_habit(habit: Habit | None) -> None:
    """Validate a habit and normalize its name. Raises on first violation."""
    if habit is None:
        raise HabitValidationError("Habit cannot be null", field="habit")
    if habit.name is None or not habit.name.strip():
        raise HabitValidationError("Habit name is required", field="name")
    if habit.frequency is None:
        raise HabitValidationError("Frequency is required", field="frequency")
    if not MIN_TARGET_PER_WEEK <= habit.target_per_week <= MAX_TARGET_PER_WEEK:
        raise HabitValidationError(
            f"Target per week must be between {MIN_TARGET_PER_WEEK} "
            f"and {MAX_TARGET_PER_WEEK}",
            field="target_per_week",
        )
    if habit.current_streak < 0 or habit.best_streak < 0:
        raise HabitValidationError("Streaks cannot be negative", field="streak")
    _check_lengths(habit)
    _check_not_future(habit)
    habit.name = habit.name.strip()


def _check_lengths(habit: Habit) -> None:
    if len(habit.name.strip()) > NAME_MAX_LENGTH:
        raise HabitValidationError(
            f"Name must be between 1 and {NAME_MAX_LENGTH} characters", field="name",
        )
    if habit.description is not None and len(habit.description) > DESCRIPTION_MAX_LENGTH:
        raise HabitValidationError(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )


def _check_not_future(habit: Habit) -> None:
    if habit.last_completed is not None and habit.last_completed > date.today():
        raise HabitValidationError(
            "Last completed cannot be in the future", field="last_completed",
        )
    created = habit.created_at
    if created is not None and created > datetime.now(created.tzinfo):
        raise HabitValidationError(
            "Created time cannot be in the future", field="created_at",
        )


def validate_min_days(min_days: int) -> None:
    """archive_inactive_habits requires a window of at least one day."""
    if min_days < 1:
        raise HabitValidationError(
            "min_days must be >= 1", field="min_days",
        )
