"""Habit Routes — HTTP mapping of HabitService operations.

Invariants:
    - Routes only translate HTTP ↔ service calls; no domain logic here
    - Static paths are registered before /{habit_id} so they are never shadowed
    - Missing habit → 404, invalid payload → 400 (via global error handlers)

Design Decisions:
    - Sync `def` handlers: the service is synchronous, FastAPI runs them in its
      threadpool (the store's lock covers the concurrent access)
    - /search keeps name-only matching; /search/text matches name or description
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from habit_tracker.api.dependencies import get_habit_service
from habit_tracker.core.domain_types import Frequency
from habit_tracker.core.errors import HabitNotFoundError
from habit_tracker.schemas.habit import HabitCreate, HabitResponse, HabitStats
from habit_tracker.services.habit_service import HabitService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/habits", tags=["habits"])


@router.get("", response_model=list[HabitResponse])
def list_habits(service: HabitService = Depends(get_habit_service)):
    return service.find_all()


@router.post(
    "", response_model=HabitResponse, status_code=status.HTTP_201_CREATED,
)
def create_habit(
    body: HabitCreate, service: HabitService = Depends(get_habit_service),
):
    """Create a new habit. The store assigns the id."""
    return service.save(body.to_habit())


# --- Queries ------------------------------------------------------------------

@router.get("/archived/{archived}", response_model=list[HabitResponse])
def list_by_archived(
    archived: bool, service: HabitService = Depends(get_habit_service),
):
    return service.find_by_archived(archived)


@router.get("/frequency/{frequency}", response_model=list[HabitResponse])
def list_by_frequency(
    frequency: Frequency, service: HabitService = Depends(get_habit_service),
):
    return service.find_by_frequency(frequency)


@router.get("/search", response_model=list[HabitResponse])
def search_by_name(
    query: str = Query(""), service: HabitService = Depends(get_habit_service),
):
    return service.find_by_name_containing(query)


@router.get("/search/text", response_model=list[HabitResponse])
def search_text(
    query: str = Query(""), service: HabitService = Depends(get_habit_service),
):
    """Match on name or description."""
    return service.search(query)


@router.get("/streak/best/{min_best_streak}", response_model=list[HabitResponse])
def list_by_best_streak(
    min_best_streak: int, service: HabitService = Depends(get_habit_service),
):
    return service.find_best_streak_at_least(min_best_streak)


@router.get("/streak/current/{min_streak}", response_model=list[HabitResponse])
def list_by_current_streak(
    min_streak: int, service: HabitService = Depends(get_habit_service),
):
    return service.find_streak_greater_than(min_streak)


@router.get("/completed/{day}", response_model=list[HabitResponse])
def list_completed_on(
    day: date, service: HabitService = Depends(get_habit_service),
):
    return service.find_completed_on(day)


@router.get("/overdue", response_model=list[HabitResponse])
def list_overdue(service: HabitService = Depends(get_habit_service)):
    return service.find_overdue()


@router.get("/created/today", response_model=list[HabitResponse])
def list_created_today(service: HabitService = Depends(get_habit_service)):
    return service.find_created_today()


@router.get("/stats", response_model=HabitStats)
def habit_stats(service: HabitService = Depends(get_habit_service)):
    archived = service.count_by_archived()
    return HabitStats(
        total=service.count(),
        by_frequency=service.count_by_frequency(),
        archived=archived.get(True, 0),
        active=archived.get(False, 0),
    )


@router.post("/archive-inactive")
def archive_inactive(
    days: int = Query(...), service: HabitService = Depends(get_habit_service),
):
    """Archive active habits not completed within `days` days."""
    return {"archived": service.archive_inactive_habits(days)}


# --- Single habit ---------------------------------------------------------------

@router.get("/{habit_id}", response_model=HabitResponse)
def get_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    habit = service.find_by_id(habit_id)
    if habit is None:
        raise HabitNotFoundError(habit_id)
    return habit


@router.put("/{habit_id}", response_model=HabitResponse)
def update_habit(
    habit_id: int,
    body: HabitCreate,
    service: HabitService = Depends(get_habit_service),
):
    return service.update(habit_id, body.to_habit())


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    service.delete_by_id(habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{habit_id}/complete", response_model=HabitResponse)
def complete_habit(habit_id: int, service: HabitService = Depends(get_habit_service)):
    """Record today's completion and update streaks."""
    return service.complete_today(habit_id)


@router.post("/{habit_id}/reset-streak", response_model=HabitResponse)
def reset_habit_streak(
    habit_id: int, service: HabitService = Depends(get_habit_service),
):
    return service.reset_streak(habit_id)


@router.put("/{habit_id}/archived/{archived}", response_model=HabitResponse)
def set_habit_archived(
    habit_id: int,
    archived: bool,
    service: HabitService = Depends(get_habit_service),
):
    return service.set_archived(habit_id, archived)
