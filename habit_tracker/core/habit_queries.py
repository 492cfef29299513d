"""Habit Queries — pure derived views over a snapshot of habits.

Invariants:
    - Pure functions: no IO, no store access, inputs never mutated
    - Input order is preserved in every returned list
    - Partition counts are non-negative and sum to len(habits)
    - Text match is case-insensitive substring; None query behaves as ""

Design Decisions:
    - Free functions over service methods: the service fetches a snapshot once,
      these compute on it (testable without a store)
    - group/count by frequency only emit keys that have members
    - count_by_archived mirrors the same rule: a partition with no members is absent
"""

from collections.abc import Iterable
from datetime import date, timedelta

from habit_tracker.core.domain_types import Frequency
from habit_tracker.core.habit import Habit


def _contains(text: str | None, needle: str) -> bool:
    return text is not None and needle in text.lower()


def search_habits(habits: Iterable[Habit], query: str | None) -> list[Habit]:
    """Habits whose name OR description contains `query` (case-insensitive)."""
    needle = (query or "").lower()
    return [
        h for h in habits
        if _contains(h.name, needle) or _contains(h.description, needle)
    ]


def group_by_frequency(habits: Iterable[Habit]) -> dict[Frequency, list[Habit]]:
    """Partition habits by frequency."""
    groups: dict[Frequency, list[Habit]] = {}
    for habit in habits:
        groups.setdefault(habit.frequency, []).append(habit)
    return groups


def count_by_frequency(habits: Iterable[Habit]) -> dict[Frequency, int]:
    """Number of habits per frequency."""
    return {
        frequency: len(members)
        for frequency, members in group_by_frequency(habits).items()
    }


def count_by_archived(habits: Iterable[Habit]) -> dict[bool, int]:
    """Number of archived (True) vs active (False) habits."""
    counts: dict[bool, int] = {}
    for habit in habits:
        counts[habit.archived] = counts.get(habit.archived, 0) + 1
    return counts


def select_inactive(
    habits: Iterable[Habit], min_days: int, today: date,
) -> list[Habit]:
    """Active habits never completed, or last completed before today - min_days."""
    cutoff = today - timedelta(days=min_days)
    return [
        h for h in habits
        if not h.archived
        and (h.last_completed is None or h.last_completed < cutoff)
    ]
