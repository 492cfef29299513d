"""In-Memory Habit Store — thread-safe container and sole authority for habit ids.

Invariants:
    - Ids come from one counter starting at FIRST_HABIT_ID, strictly increasing and
      always above every stored id (explicit ids included), reset only by delete_all()
    - Every habit stored or returned is a fresh copy (caller and store never alias)
    - The caller's habit is never mutated; the assigned id is visible on the returned copy
    - All sequences are tuples ordered by ascending id
    - Absence is structural (None / empty tuple) — this module never raises domain errors

Design Decisions:
    - One threading.Lock guards both the dict and the counter: each method is atomic
      for its own effect; cross-call sequences (load → save) are NOT atomic
    - In-memory only, state lost on restart (no durable persistence by scope)
    - Date-dependent filters take an optional `today` so tests can pin the calendar
"""

import threading
from collections.abc import Callable, Iterable
from datetime import date, timedelta

from habit_tracker.core.domain_types import (
    FIRST_HABIT_ID, OVERDUE_AFTER_DAYS, Frequency, HabitId,
)
from habit_tracker.core.habit import Habit


class InMemoryHabitRepository:
    """HabitRepository backed by a dict keyed by habit id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._storage: dict[HabitId, Habit] = {}
        self._next_id = FIRST_HABIT_ID

    # --- CRUD ------------------------------------------------------------------

    def save(self, entity: Habit) -> Habit:
        """Store a copy, assigning the next id when the habit is new."""
        with self._lock:
            return self._save_locked(entity)

    def save_all(self, entities: Iterable[Habit] | None) -> tuple[Habit, ...]:
        if not entities:
            return ()
        return tuple(self.save(entity) for entity in entities)

    def find_by_id(self, entity_id: HabitId) -> Habit | None:
        with self._lock:
            found = self._storage.get(entity_id)
            return found.copy() if found is not None else None

    def find_all(self) -> tuple[Habit, ...]:
        return self._select(lambda h: True)

    def delete_by_id(self, entity_id: HabitId) -> None:
        with self._lock:
            self._storage.pop(entity_id, None)

    def exists_by_id(self, entity_id: HabitId) -> bool:
        with self._lock:
            return entity_id in self._storage

    def count(self) -> int:
        with self._lock:
            return len(self._storage)

    def delete_all(self) -> None:
        """Full reset: empties the store AND restarts the id counter."""
        with self._lock:
            self._storage.clear()
            self._next_id = FIRST_HABIT_ID

    # --- Domain filters --------------------------------------------------------

    def find_by_archived(self, archived: bool) -> tuple[Habit, ...]:
        return self._select(lambda h: h.archived == archived)

    def find_by_frequency(self, frequency: Frequency | None) -> tuple[Habit, ...]:
        if frequency is None:
            return ()
        return self._select(lambda h: h.frequency == frequency)

    def find_by_name_containing(self, term: str | None) -> tuple[Habit, ...]:
        needle = (term or "").lower()
        return self._select(
            lambda h: h.name is not None and needle in h.name.lower(),
        )

    def find_best_streak_at_least(self, threshold: int) -> tuple[Habit, ...]:
        return self._select(lambda h: h.best_streak >= threshold)

    def find_streak_greater_than(self, threshold: int) -> tuple[Habit, ...]:
        # inclusive (>=) despite the name; callers rely on it
        return self._select(lambda h: h.current_streak >= threshold)

    def find_completed_on(self, day: date | None) -> tuple[Habit, ...]:
        if day is None:
            return ()
        return self._select(lambda h: h.last_completed == day)

    def find_created_today(self, today: date | None = None) -> tuple[Habit, ...]:
        today = today or date.today()
        return self._select(
            lambda h: h.created_at is not None and h.created_at.date() == today,
        )

    def find_overdue(self, today: date | None = None) -> tuple[Habit, ...]:
        """Completed at least once, but not within the last OVERDUE_AFTER_DAYS days."""
        threshold = (today or date.today()) - timedelta(days=OVERDUE_AFTER_DAYS)
        return self._select(
            lambda h: h.last_completed is not None and h.last_completed < threshold,
        )

    # --- Internals -------------------------------------------------------------

    def _save_locked(self, entity: Habit) -> Habit:
        stored = entity.copy()
        if stored.id is None:
            stored.id = self._next_id
        # counter stays ahead of every stored id, including caller-chosen ones
        self._next_id = HabitId(max(self._next_id, stored.id + 1))
        self._storage[stored.id] = stored
        return stored.copy()

    def _select(self, predicate: Callable[[Habit], bool]) -> tuple[Habit, ...]:
        with self._lock:
            matches = sorted(
                (h for h in self._storage.values() if predicate(h)),
                key=lambda h: h.id,
            )
            return tuple(h.copy() for h in matches)
