"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.repository.data_repository import DataRepository
from backend.services.reservation_service import ReservationService
from backend.utils.config import get_settings


def get_reservation_service(request: Request) -> ReservationService:
    service = getattr(request.app.state, "reservation_service", None)
    if service is None:
        repository = getattr(request.app.state, "repository", None)
        if isinstance(repository, DataRepository):
            service = ReservationService(repository=repository, settings=get_settings())
            request.app.state.reservation_service = service
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reservation service is not initialized",
        )
    return service
