"""
app.py — FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the repository and reservation service, registers the router, and
prepares the database on startup.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from backend.controllers.reservation_controller import router as reservation_router
from backend.repository.data_repository import DataRepository
from backend.services.reservation_service import ReservationService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services are placed on app.state and resolved by the dependency providers
    in backend.controllers.dependencies.
    """
    settings = settings or get_settings()

    repository = DataRepository(settings)
    reservation_service = ReservationService(
        repository=repository,
        settings=settings,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Run startup initialization before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(reservation_router)

    app.state.repository = repository
    app.state.reservation_service = reservation_service

    return app


def _startup(app: FastAPI) -> None:
    """
    Idempotent startup sequence. Safe to re-run on server restarts.

    The schema must exist before the demo halls and lecturers are seeded.
    """
    repository: DataRepository = app.state.repository

    logger.info("Startup: initializing database schema")
    repository.initialize_database()

    logger.info("Startup: seeding demo halls and lecturers (skipped if halls exist)")
    repository.seed_demo_data()

    logger.info("Startup complete — system ready")


# Module-level app object for uvicorn
app = create_app()
