"""HTTP controller layer for reservations and hall statistics."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, field_validator

from backend.controllers.dependencies import get_reservation_service
from backend.domain.models import NewReservation, Reservation, ValidationOutcome
from backend.services.reservation_service import ReservationService
from backend.services.schedule_service import DayNotInFutureError, HallNotFoundError
from backend.services.validation_service import ReservationArgumentError
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["reservations"])


class NewReservationRequest(BaseModel):
    """Input DTO; rule checks happen in the service, not here."""

    start_time: datetime
    end_time: datetime
    lecture_hall_number: int
    lecturer_id: int

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_naive_datetime(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            raise ValueError("reservation times must be local wall-clock times without a timezone")
        return value

    def to_domain(self) -> NewReservation:
        return NewReservation(
            start_time=self.start_time,
            end_time=self.end_time,
            lecture_hall_number=self.lecture_hall_number,
            lecturer_id=self.lecturer_id,
        )


class ReservationItem(BaseModel):
    id: int = Field(gt=0)
    start_time: datetime
    end_time: datetime
    lecture_hall_number: int
    lecturer_id: int

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationItem":
        return cls(
            id=reservation.reservation_id,
            start_time=reservation.start_time,
            end_time=reservation.end_time,
            lecture_hall_number=reservation.hall.number,
            lecturer_id=reservation.lecturer.lecturer_id,
        )


class ValidationResponse(BaseModel):
    admitted: bool
    result: int = Field(ge=0)
    reasons: list[str]

    @classmethod
    def from_outcome(cls, outcome: ValidationOutcome) -> "ValidationResponse":
        return cls(
            admitted=outcome.admitted,
            result=outcome.result.value,
            reasons=outcome.reasons,
        )


class ReservationCreatedResponse(BaseModel):
    id: int = Field(gt=0)
    validation: ValidationResponse


class HallFreeHoursResponse(BaseModel):
    hall_number: int
    free_hours: int = Field(ge=0, le=24)


@router.get(
    "/reservations",
    response_model=list[ReservationItem],
    status_code=status.HTTP_200_OK,
)
async def list_reservations(
    service: ReservationService = Depends(get_reservation_service),
) -> list[ReservationItem]:
    return [ReservationItem.from_domain(item) for item in service.all()]


@router.get(
    "/reservations/by_day",
    response_model=list[ReservationItem],
    status_code=status.HTTP_200_OK,
)
async def reservations_by_day(
    day: date = Query(...),
    hall_number: int = Query(...),
    service: ReservationService = Depends(get_reservation_service),
) -> list[ReservationItem]:
    """Chronological reservations of one hall on one day."""
    try:
        reservations = service.get_by_day(day, hall_number)
        return [ReservationItem.from_domain(item) for item in reservations]
    except HallNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected day schedule failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load day schedule",
        ) from exc


@router.get(
    "/reservations/{reservation_id}",
    response_model=ReservationItem,
    status_code=status.HTTP_200_OK,
)
async def get_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationItem:
    reservation = service.get_by_id(reservation_id)
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Reservation {reservation_id} does not exist",
        )
    return ReservationItem.from_domain(reservation)


@router.post(
    "/reservations/validate",
    response_model=ValidationResponse,
    status_code=status.HTTP_200_OK,
)
async def validate_reservation(
    payload: NewReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
) -> ValidationResponse:
    """Report every rule the proposal breaks without storing anything."""
    try:
        outcome = service.validate_new_reservation(payload.to_domain())
        return ValidationResponse.from_outcome(outcome)
    except ReservationArgumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected validation failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to validate reservation",
        ) from exc


@router.post(
    "/reservations",
    response_model=ReservationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reservation(
    payload: NewReservationRequest,
    service: ReservationService = Depends(get_reservation_service),
) -> ReservationCreatedResponse:
    try:
        result = service.add(payload.to_domain())
    except ReservationArgumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected reservation insert failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add reservation",
        ) from exc

    validation = ValidationResponse.from_outcome(result.outcome)
    if result.reservation_id is None:
        raise HTTPException(
            status_code=422,
            detail=validation.model_dump(),
        )
    return ReservationCreatedResponse(id=result.reservation_id, validation=validation)


@router.delete(
    "/reservations/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_reservation(
    reservation_id: int,
    service: ReservationService = Depends(get_reservation_service),
) -> None:
    service.delete(reservation_id)


@router.get(
    "/lecture_halls/free_hours",
    response_model=list[HallFreeHoursResponse],
    status_code=status.HTTP_200_OK,
)
async def halls_free_hours(
    day: date = Query(...),
    service: ReservationService = Depends(get_reservation_service),
) -> list[HallFreeHoursResponse]:
    try:
        statistics = service.get_halls_free_hours_by_day(day)
        return [
            HallFreeHoursResponse(hall_number=item.hall_number, free_hours=item.free_hours)
            for item in statistics
        ]
    except DayNotInFutureError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected free hours failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute free hours",
        ) from exc


class LectureHallResponse(BaseModel):
    number: int


class LecturerResponse(BaseModel):
    id: int = Field(gt=0)
    name: str
    surname: str


@router.get(
    "/lecture_halls",
    response_model=list[LectureHallResponse],
    status_code=status.HTTP_200_OK,
)
async def list_lecture_halls(
    service: ReservationService = Depends(get_reservation_service),
) -> list[LectureHallResponse]:
    return [LectureHallResponse(number=hall.number) for hall in service.lecture_halls()]


@router.get(
    "/lecturers",
    response_model=list[LecturerResponse],
    status_code=status.HTTP_200_OK,
)
async def list_lecturers(
    service: ReservationService = Depends(get_reservation_service),
) -> list[LecturerResponse]:
    return [
        LecturerResponse(id=lecturer.lecturer_id, name=lecturer.name, surname=lecturer.surname)
        for lecturer in service.lecturers()
    ]
