"""Domain Types — rich types and limits shared across the habit tracker.

Invariants:
    - HabitId wraps int — identities are assigned by the store, starting at 1
    - Frequency is a closed set: DAILY, WEEKLY, CUSTOM
    - All field limits live here as named constants (single source of truth)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - OVERDUE_AFTER_DAYS is a constant, not a setting (no configuration surface)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

HabitId = NewType("HabitId", int)

FIRST_HABIT_ID = HabitId(1)


# ─── Enums ───────────────────────────────────────────────────────

class Frequency(str, Enum):
    """Target cadence category for a habit. Orthogonal to target_per_week."""
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    CUSTOM = "CUSTOM"


# ─── Field Limits ────────────────────────────────────────────────

NAME_MAX_LENGTH: int = 100
DESCRIPTION_MAX_LENGTH: int = 500
MIN_TARGET_PER_WEEK: int = 1
MAX_TARGET_PER_WEEK: int = 7
DEFAULT_TARGET_PER_WEEK: int = 7

# Habits last completed more than this many days ago are overdue
OVERDUE_AFTER_DAYS: int = 7
