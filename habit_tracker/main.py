"""Habit Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HabitTrackerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Each create_app() call owns exactly one store + service (app.state)

Design Decisions:
    - App factory over a module-level store: no implicit global singleton, tests
      build isolated apps; `app` is the default instance for uvicorn
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from habit_tracker.api.error_handlers import register_error_handlers
from habit_tracker.api.routes import habits, health
from habit_tracker.config import get_settings
from habit_tracker.core.repository_protocols import HabitRepository
from habit_tracker.infrastructure.memory_store import InMemoryHabitRepository
from habit_tracker.infrastructure.observability import setup_logging
from habit_tracker.services.habit_service import HabitService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"{settings.app_name} started")
    yield
    logger.info(f"{settings.app_name} shutting down")


def create_app(repository: HabitRepository | None = None) -> FastAPI:
    """Build the API around `repository` (a fresh in-memory store by default)."""
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version="1.0.0", lifespan=lifespan)
    app.state.habit_service = HabitService(
        repository if repository is not None else InMemoryHabitRepository(),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(habits.router)
    register_error_handlers(app)
    return app


app = create_app()
