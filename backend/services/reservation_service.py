"""Reservation workflows: snapshot from storage, run the core, persist."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from backend.domain.constraints import SchedulingRules
from backend.domain.models import (
    HallFreeHoursStatistic,
    LectureHall,
    Lecturer,
    NewReservation,
    Reservation,
    ValidationOutcome,
)
from backend.repository.data_repository import DataRepository
from backend.services.schedule_service import halls_free_hours_by_day, reservations_on_day
from backend.services.validation_service import (
    ReservationArgumentError,
    validate_new_reservation,
)
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class AddReservationResult:
    outcome: ValidationOutcome
    reservation_id: int | None = None


class ReservationService:
    """Business logic orchestration for lecture hall reservations.

    Every call reads a fresh snapshot from the repository. Nothing guards the
    window between validation and insert in `add`.
    """

    def __init__(
        self,
        repository: Optional[DataRepository] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._repository = repository or DataRepository(self._settings)
        self._rules = SchedulingRules.from_settings(self._settings)
        self._clock = clock or date.today

    @property
    def rules(self) -> SchedulingRules:
        return self._rules

    def all(self) -> list[Reservation]:
        return self._repository.list_reservations()

    def lecture_halls(self) -> list[LectureHall]:
        return self._repository.list_lecture_halls()

    def lecturers(self) -> list[Lecturer]:
        return self._repository.list_lecturers()

    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        return self._repository.get_reservation(reservation_id)

    def validate_new_reservation(
        self,
        new_reservation: Optional[NewReservation],
    ) -> ValidationOutcome:
        if new_reservation is None:
            raise ReservationArgumentError("new_reservation is required")
        return validate_new_reservation(
            new_reservation,
            reservations=self._repository.list_reservations(),
            lecture_halls=self._repository.list_lecture_halls(),
            lecturers=self._repository.list_lecturers(),
            rules=self._rules,
        )

    def add(self, new_reservation: Optional[NewReservation]) -> AddReservationResult:
        """Validate and, when admitted, store the reservation."""
        outcome = self.validate_new_reservation(new_reservation)
        if not outcome.admitted:
            logger.info(
                "Reservation rejected | hall=%s | lecturer=%s | reasons=%s",
                new_reservation.lecture_hall_number,
                new_reservation.lecturer_id,
                ",".join(outcome.reasons),
            )
            return AddReservationResult(outcome=outcome)

        reservation_id = self._repository.add_reservation(
            start_time=new_reservation.start_time,
            end_time=new_reservation.end_time,
            lecture_hall_number=new_reservation.lecture_hall_number,
            lecturer_id=new_reservation.lecturer_id,
        )
        logger.info(
            "Reservation added | id=%s | hall=%s | lecturer=%s | from=%s | to=%s",
            reservation_id,
            new_reservation.lecture_hall_number,
            new_reservation.lecturer_id,
            new_reservation.start_time.isoformat(),
            new_reservation.end_time.isoformat(),
        )
        return AddReservationResult(outcome=outcome, reservation_id=reservation_id)

    def delete(self, reservation_id: int) -> None:
        self._repository.delete_reservation(reservation_id)
        logger.info("Reservation deleted (if present) | id=%s", reservation_id)

    def get_by_day(self, day: date, hall_number: int) -> list[Reservation]:
        return reservations_on_day(
            day,
            hall_number,
            reservations=self._repository.list_reservations(),
            lecture_halls=self._repository.list_lecture_halls(),
        )

    def get_halls_free_hours_by_day(self, day: date) -> list[HallFreeHoursStatistic]:
        return halls_free_hours_by_day(
            day,
            today=self._clock(),
            reservations=self._repository.list_reservations(),
            lecture_halls=self._repository.list_lecture_halls(),
            rules=self._rules,
        )
