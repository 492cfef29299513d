"""Habit Service — business logic over an injected habit repository.

Invariants:
    - save / save_all / update validate BEFORE persisting; a rejected habit never
      reaches the store
    - save_all validates the whole batch first: one bad entry persists nothing
    - Unknown ids raise HabitNotFoundError here (the store itself treats them as absence)
    - Returned habits are store copies; mutating them never changes stored state

Design Decisions:
    - Repository injected via constructor (no global singleton); the FastAPI app
      builds one per create_app()
    - Derived views (search, grouping, counts, inactivity) are pure functions in
      core/habit_queries.py applied to a find_all() snapshot
    - Load → mutate → save sequences (complete_today, set_archived, reset_streak,
      archive_inactive_habits) are NOT atomic across the pair: a concurrent write
      to the same id in between is overwritten (last write wins). Accepted race,
      no cross-operation locking
    - `today` is an optional keyword on date-dependent operations so callers and
      tests can pin the calendar
"""

import logging
from collections.abc import Iterable
from datetime import date

from habit_tracker.core.domain_types import Frequency, HabitId
from habit_tracker.core.enforce_habit import validate_habit, validate_min_days
from habit_tracker.core.errors import HabitNotFoundError, HabitValidationError
from habit_tracker.core.habit import Habit
from habit_tracker.core import habit_queries
from habit_tracker.core.repository_protocols import HabitRepository

logger = logging.getLogger(__name__)


class HabitService:
    """Validation, CRUD, derived queries and streak/archival operations."""

    def __init__(self, repository: HabitRepository) -> None:
        self._repository = repository

    # --- CRUD ------------------------------------------------------------------

    def find_by_id(self, habit_id: HabitId) -> Habit | None:
        return self._repository.find_by_id(habit_id)

    def find_all(self) -> tuple[Habit, ...]:
        return self._repository.find_all()

    def exists_by_id(self, habit_id: HabitId) -> bool:
        return self._repository.exists_by_id(habit_id)

    def count(self) -> int:
        return self._repository.count()

    def save(self, habit: Habit) -> Habit:
        """Validate (trimming the name in place) then persist."""
        self._validate(habit)
        saved = self._repository.save(habit)
        logger.info(f"Habit {saved.id} saved", extra={"habit_id": saved.id})
        return saved

    def save_all(self, habits: Iterable[Habit] | None) -> tuple[Habit, ...]:
        """Validate every habit, then persist them in order."""
        batch = list(habits or ())
        for habit in batch:
            self._validate(habit)
        saved = self._repository.save_all(batch)
        logger.info(f"Saved batch of {len(saved)} habit(s)", extra={"count": len(saved)})
        return saved

    def update(self, habit_id: HabitId, habit: Habit) -> Habit:
        """Replace an existing habit's fields.

        The payload's own id is ignored and the stored created_at is kept.
        """
        existing = self._load(habit_id)
        self._validate(habit)
        replacement = habit.copy()
        replacement.id = habit_id
        replacement.created_at = existing.created_at
        saved = self._repository.save(replacement)
        logger.info(f"Habit {habit_id} updated", extra={"habit_id": habit_id})
        return saved

    def delete_by_id(self, habit_id: HabitId) -> None:
        self._require_exists(habit_id)
        self._repository.delete_by_id(habit_id)
        logger.info(f"Habit {habit_id} deleted", extra={"habit_id": habit_id})

    # --- Query pass-throughs ---------------------------------------------------

    def find_by_archived(self, archived: bool) -> tuple[Habit, ...]:
        return self._repository.find_by_archived(archived)

    def find_by_frequency(self, frequency: Frequency | None) -> tuple[Habit, ...]:
        return self._repository.find_by_frequency(frequency)

    def find_by_name_containing(self, term: str | None) -> tuple[Habit, ...]:
        return self._repository.find_by_name_containing(term)

    def find_streak_greater_than(self, threshold: int) -> tuple[Habit, ...]:
        return self._repository.find_streak_greater_than(threshold)

    def find_best_streak_at_least(self, threshold: int) -> tuple[Habit, ...]:
        return self._repository.find_best_streak_at_least(threshold)

    def find_completed_on(self, day: date | None) -> tuple[Habit, ...]:
        return self._repository.find_completed_on(day)

    def find_created_today(self, today: date | None = None) -> tuple[Habit, ...]:
        return self._repository.find_created_today(today)

    def find_overdue(self, today: date | None = None) -> tuple[Habit, ...]:
        return self._repository.find_overdue(today)

    # --- Derived views ---------------------------------------------------------

    def search(self, query: str | None) -> list[Habit]:
        """Case-insensitive match on name or description."""
        return habit_queries.search_habits(self.find_all(), query)

    def group_by_frequency(self) -> dict[Frequency, list[Habit]]:
        return habit_queries.group_by_frequency(self.find_all())

    def count_by_frequency(self) -> dict[Frequency, int]:
        return habit_queries.count_by_frequency(self.find_all())

    def count_by_archived(self) -> dict[bool, int]:
        return habit_queries.count_by_archived(self.find_all())

    # --- Streaks & archival ----------------------------------------------------

    def complete_today(self, habit_id: HabitId, today: date | None = None) -> Habit:
        """Record a completion and apply the streak-continuation rule."""
        habit = self._load(habit_id)
        habit.complete_today(today)
        logger.info(
            f"Habit {habit_id} completed, streak={habit.current_streak} "
            f"best={habit.best_streak}",
            extra={"habit_id": habit_id},
        )
        return self.save(habit)

    def reset_streak(self, habit_id: HabitId) -> Habit:
        habit = self._load(habit_id)
        habit.reset_current_streak()
        return self.save(habit)

    def set_archived(self, habit_id: HabitId, archived: bool) -> Habit:
        habit = self._load(habit_id)
        habit.archived = archived
        return self.save(habit)

    def archive_inactive_habits(self, min_days: int, today: date | None = None) -> int:
        """Archive active habits not completed within `min_days`. Returns how many."""
        validate_min_days(min_days)
        stale = habit_queries.select_inactive(
            self.find_all(), min_days, today or date.today(),
        )
        for habit in stale:
            habit.archived = True
        self.save_all(stale)
        logger.info(
            f"Archived {len(stale)} habit(s) inactive for more than {min_days} day(s)",
            extra={"count": len(stale)},
        )
        return len(stale)

    # --- Internals -------------------------------------------------------------

    def _load(self, habit_id: HabitId) -> Habit:
        habit = self._repository.find_by_id(habit_id)
        if habit is None:
            logger.warning(f"Habit {habit_id} not found", extra={"habit_id": habit_id})
            raise HabitNotFoundError(habit_id)
        return habit

    def _require_exists(self, habit_id: HabitId) -> None:
        if not self._repository.exists_by_id(habit_id):
            logger.warning(f"Habit {habit_id} not found", extra={"habit_id": habit_id})
            raise HabitNotFoundError(habit_id)

    def _validate(self, habit: Habit | None) -> None:
        try:
            validate_habit(habit)
        except HabitValidationError as e:
            logger.warning(
                f"Habit rejected: {e.message}",
                extra={"error_code": e.code, "field": e.field},
            )
            raise
