"""Habit Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - HabitCreate.name: stripped first, then 1-100 chars
    - HabitCreate.description: at most 500 chars
    - target_per_week in [1, 7]; streaks >= 0
    - last_completed and created_at must not lie in the future
    - HabitResponse mirrors the entity one-to-one (read from attributes)

Design Decisions:
    - Field constraints at the boundary; core/enforce_habit.py re-checks the core
      rules so non-HTTP callers get the same guarantees
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from habit_tracker.core.domain_types import (
    DEFAULT_TARGET_PER_WEEK, DESCRIPTION_MAX_LENGTH, MAX_TARGET_PER_WEEK,
    MIN_TARGET_PER_WEEK, NAME_MAX_LENGTH, Frequency,
)
from habit_tracker.core.habit import Habit


class HabitCreate(BaseModel):
    """Habit create/update payload — ids are never accepted from clients."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    frequency: Frequency = Frequency.DAILY
    target_per_week: int = Field(
        DEFAULT_TARGET_PER_WEEK, ge=MIN_TARGET_PER_WEEK, le=MAX_TARGET_PER_WEEK,
    )
    current_streak: int = Field(0, ge=0)
    best_streak: int = Field(0, ge=0)
    last_completed: date | None = None
    created_at: datetime | None = None
    archived: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("last_completed")
    @classmethod
    def last_completed_not_future(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("last_completed cannot be in the future")
        return v

    @field_validator("created_at")
    @classmethod
    def created_at_not_future(cls, v: datetime | None) -> datetime | None:
        if v is not None and v > datetime.now(v.tzinfo):
            raise ValueError("created_at cannot be in the future")
        return v

    def to_habit(self) -> Habit:
        """Build a new (id-less) entity from the payload."""
        fields = self.model_dump(exclude={"created_at"})
        if self.created_at is not None:
            fields["created_at"] = self.created_at
        return Habit(**fields)


class HabitResponse(BaseModel):
    """Habit response — public-facing habit data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    frequency: Frequency
    target_per_week: int
    current_streak: int
    best_streak: int
    last_completed: date | None
    created_at: datetime
    archived: bool


class HabitStats(BaseModel):
    """Aggregate counts — every habit appears once in each partition."""
    total: int
    by_frequency: dict[Frequency, int]
    archived: int
    active: int
