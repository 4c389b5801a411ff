"""Rule-based admission check for proposed reservations.

All rules are evaluated on every call and every violation is reported.
Rule violations are returned as a `ValidationOutcome`; only a missing
proposal raises.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from backend.domain.constraints import SchedulingRules
from backend.domain.models import (
    LectureHall,
    Lecturer,
    NewReservation,
    Reservation,
    ValidationOutcome,
    ValidationResult,
)


_ONE_HOUR = timedelta(hours=1)


class ReservationArgumentError(ValueError):
    """Raised when no proposed reservation is supplied."""


def _spans_more_than_one_day(new_reservation: NewReservation) -> bool:
    return new_reservation.start_time.date() != new_reservation.end_time.date()


def _ends_before_start(new_reservation: NewReservation) -> bool:
    return new_reservation.start_time.hour >= new_reservation.end_time.hour


def _outside_working_hours(new_reservation: NewReservation, rules: SchedulingRules) -> bool:
    return (
        new_reservation.start_time.hour < rules.working_day_start_hour
        or new_reservation.end_time.hour > rules.working_day_end_hour
    )


def _too_long(new_reservation: NewReservation, rules: SchedulingRules) -> bool:
    # int() truncates toward zero: 3h59m counts as 3 whole hours.
    whole_hours = int((new_reservation.end_time - new_reservation.start_time) / _ONE_HOUR)
    return whole_hours > rules.max_reservation_hours


def _overlaps(existing: Reservation, new_reservation: NewReservation) -> bool:
    existing_start = existing.start_time.hour
    existing_end = existing.end_time.hour
    proposed_start = new_reservation.start_time.hour
    proposed_end = new_reservation.end_time.hour
    return (
        (existing_end > proposed_start and existing_start <= proposed_start)
        or (existing_start < proposed_end and existing_end >= proposed_end)
        or (existing_start >= proposed_start and existing_end <= proposed_end)
    )


def find_conflicts(
    new_reservation: NewReservation,
    reservations: Iterable[Reservation],
) -> list[Reservation]:
    """Return reservations in the proposal's hall and day that clash with it."""
    proposed_day = new_reservation.start_time.date()
    return [
        reservation
        for reservation in reservations
        if reservation.start_time.date() == proposed_day
        and reservation.hall.number == new_reservation.lecture_hall_number
        and _overlaps(reservation, new_reservation)
    ]


def validate_new_reservation(
    new_reservation: Optional[NewReservation],
    reservations: Iterable[Reservation],
    lecture_halls: Iterable[LectureHall],
    lecturers: Iterable[Lecturer],
    rules: Optional[SchedulingRules] = None,
) -> ValidationOutcome:
    if new_reservation is None:
        raise ReservationArgumentError("new_reservation is required")
    rules = rules or SchedulingRules()

    result = ValidationResult(0)

    if _spans_more_than_one_day(new_reservation):
        result |= ValidationResult.MORE_THAN_ONE_DAY

    if _ends_before_start(new_reservation):
        result |= ValidationResult.TO_BEFORE_FROM

    if _outside_working_hours(new_reservation, rules):
        result |= ValidationResult.OUTSIDE_WORKING_HOURS

    if _too_long(new_reservation, rules):
        result |= ValidationResult.TOO_LONG

    if find_conflicts(new_reservation, reservations):
        result |= ValidationResult.CONFLICTING

    if not any(lecturer.lecturer_id == new_reservation.lecturer_id for lecturer in lecturers):
        result |= ValidationResult.LECTURER_DOES_NOT_EXIST

    if not any(hall.number == new_reservation.lecture_hall_number for hall in lecture_halls):
        result |= ValidationResult.HALL_DOES_NOT_EXIST

    return ValidationOutcome(violations=result)
