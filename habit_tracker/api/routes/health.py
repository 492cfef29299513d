"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up
    - Reports the current habit count (the store is in-process, so it is always ready)
"""

import logging
from fastapi import APIRouter, Depends, status

from habit_tracker.api.dependencies import get_habit_service
from habit_tracker.services.habit_service import HabitService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
def health_check(service: HabitService = Depends(get_habit_service)):
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "habit-tracker-api",
        "habits": service.count(),
    }
