"""API Dependencies — resolve the HabitService owned by the running app.

Invariants:
    - The service lives on app.state, created by create_app(); never a module global

Design Decisions:
    - Depends() over direct import: tests swap the store by building a fresh app
"""

from fastapi import Request

from habit_tracker.services.habit_service import HabitService


def get_habit_service(request: Request) -> HabitService:
    return request.app.state.habit_service
