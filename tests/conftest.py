"""Root conftest — shared fixtures: a fresh store and service per test."""

import os
from datetime import date, datetime

import pytest

from habit_tracker.core.domain_types import Frequency
from habit_tracker.core.habit import Habit
from habit_tracker.infrastructure.memory_store import InMemoryHabitRepository
from habit_tracker.services.habit_service import HabitService

# Keep test output readable regardless of the developer's .env
os.environ.setdefault("LOG_FORMAT", "text")

TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def store() -> InMemoryHabitRepository:
    return InMemoryHabitRepository()


@pytest.fixture
def service(store) -> HabitService:
    return HabitService(store)


@pytest.fixture
def make_habit():
    """Factory for valid, unsaved habits."""
    def _make(name: str = "Morning Run", **fields) -> Habit:
        fields.setdefault("frequency", Frequency.DAILY)
        fields.setdefault("created_at", datetime(2024, 6, 1, 8, 30))
        return Habit(name=name, **fields)
    return _make
