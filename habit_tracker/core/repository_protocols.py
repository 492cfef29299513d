"""Boundary Protocols — contracts between the core and the store implementation.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Every value crossing a repository boundary is an independent copy
    - Repositories signal absence structurally (None / empty tuple), never by raising
    - Sequences returned are ordered by ascending id and read-only (tuples)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Generic Repository[T, ID] for CRUD, HabitRepository adds domain filters:
      composition in the service instead of a template-method base class
    - Sync, not async: the store is in-process memory, no IO to await
"""

from collections.abc import Iterable
from datetime import date
from typing import Protocol, TypeVar

from habit_tracker.core.domain_types import Frequency, HabitId
from habit_tracker.core.habit import Habit

T = TypeVar("T")
ID = TypeVar("ID")


class Repository(Protocol[T, ID]):
    """Generic CRUD contract — identity assignment belongs to the implementation."""
    def save(self, entity: T) -> T: ...
    def save_all(self, entities: Iterable[T] | None) -> tuple[T, ...]: ...
    def find_by_id(self, entity_id: ID) -> T | None: ...
    def find_all(self) -> tuple[T, ...]: ...
    def delete_by_id(self, entity_id: ID) -> None: ...
    def exists_by_id(self, entity_id: ID) -> bool: ...
    def count(self) -> int: ...
    def delete_all(self) -> None: ...


class HabitRepository(Repository[Habit, HabitId], Protocol):
    """Habit store contract — CRUD plus domain query filters."""
    def find_by_archived(self, archived: bool) -> tuple[Habit, ...]: ...
    def find_by_frequency(self, frequency: Frequency | None) -> tuple[Habit, ...]: ...
    def find_by_name_containing(self, term: str | None) -> tuple[Habit, ...]: ...
    def find_best_streak_at_least(self, threshold: int) -> tuple[Habit, ...]: ...
    def find_streak_greater_than(self, threshold: int) -> tuple[Habit, ...]: ...
    def find_completed_on(self, day: date | None) -> tuple[Habit, ...]: ...
    def find_created_today(self, today: date | None = None) -> tuple[Habit, ...]: ...
    def find_overdue(self, today: date | None = None) -> tuple[Habit, ...]: ...
