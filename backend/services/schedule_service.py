"""Read-only schedule queries over a reservation snapshot."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from backend.domain.constraints import SchedulingRules
from backend.domain.models import HallFreeHoursStatistic, LectureHall, Reservation


class ScheduleQueryError(Exception):
    """Base exception for schedule query failures."""


class HallNotFoundError(ScheduleQueryError):
    """Raised when a lecture hall number is not registered."""


class DayNotInFutureError(ScheduleQueryError):
    """Raised when free hours are requested for today or a past day."""


def reservations_on_day(
    day: date,
    hall_number: int,
    reservations: Iterable[Reservation],
    lecture_halls: Iterable[LectureHall],
) -> list[Reservation]:
    """Return the hall's reservations on `day` in chronological order.

    An unknown hall raises instead of yielding an empty list, so a stale hall
    number is never mistaken for a free day.
    """
    if not any(hall.number == hall_number for hall in lecture_halls):
        raise HallNotFoundError(f"Lecture hall {hall_number} does not exist")

    matching = [
        reservation
        for reservation in reservations
        if reservation.start_time.date() == day and reservation.hall.number == hall_number
    ]
    return sorted(matching, key=lambda reservation: reservation.start_time)


def halls_free_hours_by_day(
    day: date,
    today: date,
    reservations: Iterable[Reservation],
    lecture_halls: Iterable[LectureHall],
    rules: Optional[SchedulingRules] = None,
) -> list[HallFreeHoursStatistic]:
    """Free working hours per hall on a future `day`, between 0 and capacity."""
    if day <= today:
        raise DayNotInFutureError(
            f"day must be after {today.isoformat()}, got {day.isoformat()}"
        )
    rules = rules or SchedulingRules()
    capacity = rules.working_day_capacity

    booked_hours_by_hall: dict[int, int] = defaultdict(int)
    for reservation in reservations:
        if reservation.start_time.date() != day:
            continue
        booked_hours_by_hall[reservation.hall.number] += (
            reservation.end_time.hour - reservation.start_time.hour
        )

    hall_numbers = sorted({hall.number for hall in lecture_halls})
    return [
        HallFreeHoursStatistic(
            hall_number=hall_number,
            free_hours=min(max(capacity - booked_hours_by_hall[hall_number], 0), capacity),
        )
        for hall_number in hall_numbers
    ]
