"""Habit Entity — the sole record of the tracker, plus its streak transitions.

Invariants:
    - current_streak and best_streak are never negative (assignment clamps to 0)
    - best_streak >= current_streak is maintained ONLY by complete_today();
      direct assignment can break it
    - copy() shares no mutable substructure with the original (all fields are scalars)
    - Equality uses id when both sides have one, else name + created_at

Design Decisions:
    - Mutable dataclass, not frozen: the service mutates loaded copies then saves them
    - __setattr__ clamp over properties: keeps dataclass fields, constructor and
      replace() working unchanged
    - complete_today takes `today` explicitly (defaults to date.today()) so the
      calendar can be pinned in tests
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from habit_tracker.core.domain_types import DEFAULT_TARGET_PER_WEEK, Frequency, HabitId


_CLAMPED_FIELDS = frozenset({"current_streak", "best_streak"})


@dataclass(eq=False)
class Habit:
    """A trackable habit with frequency, streaks and completion metadata."""

    name: str | None = None
    description: str | None = None
    frequency: Frequency | None = Frequency.DAILY
    target_per_week: int = DEFAULT_TARGET_PER_WEEK
    current_streak: int = 0
    best_streak: int = 0
    last_completed: date | None = None
    created_at: datetime = field(default_factory=datetime.now)
    archived: bool = False
    id: HabitId | None = None

    def __setattr__(self, name: str, value) -> None:
        if name in _CLAMPED_FIELDS:
            value = max(0, value)
        super().__setattr__(name, value)

    # --- Streak transitions ----------------------------------------------------

    def complete_today(self, today: date | None = None) -> None:
        """Mark completed on `today` and update streaks.

        Yesterday continues the run, any earlier (or no) completion restarts it
        at 1, and a repeat on the same day leaves current_streak unchanged.
        """
        today = today or date.today()
        last = self.last_completed
        if last is not None and last + timedelta(days=1) == today:
            self.current_streak += 1
        elif last is None or last < today:
            self.current_streak = 1
        self.best_streak = max(self.best_streak, self.current_streak)
        self.last_completed = today

    def reset_current_streak(self) -> None:
        """Drop the active run; best_streak keeps the historical maximum."""
        self.current_streak = 0

    # --- Copy & identity -------------------------------------------------------

    def copy(self) -> "Habit":
        """Independent structural copy."""
        return dataclasses.replace(self)

    @property
    def is_new(self) -> bool:
        return self.id is None

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Habit):
            return NotImplemented
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return self.name == other.name and self.created_at == other.created_at

    def __hash__(self) -> int:
        if self.id is not None:
            return hash(self.id)
        return hash((self.name, self.created_at))
