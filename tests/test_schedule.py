from __future__ import annotations

from collections import Counter
from datetime import date, datetime

import pytest

from backend.domain.constraints import SchedulingRules
from backend.domain.models import LectureHall, Lecturer, Reservation
from backend.services.schedule_service import (
    DayNotInFutureError,
    HallNotFoundError,
    ScheduleQueryError,
    halls_free_hours_by_day,
    reservations_on_day,
)


LECTURER = Lecturer(lecturer_id=1, name="Anna", surname="Nowak")
HALLS = [LectureHall(number=201), LectureHall(number=202)]


def _reservation(reservation_id: int, hall_number: int, start: datetime, end: datetime) -> Reservation:
    return Reservation(
        reservation_id=reservation_id,
        hall=LectureHall(number=hall_number),
        lecturer=LECTURER,
        start_time=start,
        end_time=end,
    )


# deliberately not in chronological order
RESERVATIONS = [
    _reservation(3, 202, datetime(2015, 1, 2, 13), datetime(2015, 1, 2, 14)),
    _reservation(1, 202, datetime(2015, 1, 2, 9), datetime(2015, 1, 2, 10)),
    _reservation(2, 202, datetime(2015, 1, 2, 10), datetime(2015, 1, 2, 11)),
    _reservation(4, 202, datetime(2015, 1, 5, 9), datetime(2015, 1, 5, 12)),
]


def test_reservations_on_day_are_returned_chronologically() -> None:
    result = reservations_on_day(date(2015, 1, 2), 202, RESERVATIONS, HALLS)

    assert [item.reservation_id for item in result] == [1, 2, 3]


def test_reservations_on_day_for_other_hall_is_empty() -> None:
    assert reservations_on_day(date(2015, 1, 2), 201, RESERVATIONS, HALLS) == []


def test_reservations_on_day_without_bookings_is_empty() -> None:
    assert reservations_on_day(date(2012, 8, 1), 202, RESERVATIONS, HALLS) == []


@pytest.mark.parametrize("day", [date(2015, 1, 2), date(2012, 8, 1), date(2099, 12, 31)])
def test_reservations_on_day_for_unknown_hall_raises(day: date) -> None:
    with pytest.raises(HallNotFoundError):
        reservations_on_day(day, 999, RESERVATIONS, HALLS)


def test_unknown_hall_raises_even_without_reservations() -> None:
    with pytest.raises(ScheduleQueryError):
        reservations_on_day(date(2015, 1, 2), 101, [], [])


# --- Free hours ---

def test_free_hours_subtract_booked_hours() -> None:
    result = halls_free_hours_by_day(date(2015, 1, 2), date(2015, 1, 1), RESERVATIONS, HALLS)

    assert {item.hall_number: item.free_hours for item in result} == {201: 10, 202: 7}


def test_free_hours_without_reservations_is_full_day() -> None:
    result = halls_free_hours_by_day(date(2030, 3, 4), date(2030, 3, 3), [], HALLS)

    assert [(item.hall_number, item.free_hours) for item in result] == [(201, 10), (202, 10)]


@pytest.mark.parametrize("day", [date(2015, 1, 1), date(2014, 12, 31)])
def test_free_hours_for_today_or_past_raises(day: date) -> None:
    with pytest.raises(DayNotInFutureError):
        halls_free_hours_by_day(day, date(2015, 1, 1), RESERVATIONS, HALLS)


def test_free_hours_for_past_day_raises_without_halls() -> None:
    with pytest.raises(DayNotInFutureError):
        halls_free_hours_by_day(date(2015, 1, 1), date(2015, 1, 1), [], [])


def test_free_hours_are_clamped_at_zero() -> None:
    overbooked = [
        _reservation(1, 201, datetime(2015, 1, 2, 8), datetime(2015, 1, 2, 18)),
        _reservation(2, 201, datetime(2015, 1, 2, 8), datetime(2015, 1, 2, 12)),
    ]

    result = halls_free_hours_by_day(date(2015, 1, 2), date(2015, 1, 1), overbooked, HALLS)

    assert {item.hall_number: item.free_hours for item in result} == {201: 0, 202: 10}


def test_every_hall_appears_once() -> None:
    halls = HALLS + [LectureHall(number=202), LectureHall(number=301)]

    result = halls_free_hours_by_day(date(2015, 1, 2), date(2015, 1, 1), RESERVATIONS, halls)

    assert sorted(item.hall_number for item in result) == [201, 202, 301]


def test_partially_reserved_day_statistics() -> None:
    day = date(2030, 5, 2)
    halls = [LectureHall(number=number) for number in (101, 102, 105, 201, 202, 203, 301, 302)]
    reservations = [
        _reservation(1, 101, datetime(2030, 5, 2, 9), datetime(2030, 5, 2, 12)),
        _reservation(2, 202, datetime(2030, 5, 2, 14), datetime(2030, 5, 2, 16)),
        _reservation(3, 203, datetime(2030, 5, 3, 9), datetime(2030, 5, 3, 12)),
    ]

    result = halls_free_hours_by_day(day, date(2030, 5, 1), reservations, halls)

    counts = Counter(item.free_hours for item in result)
    assert len(result) == 8
    assert counts == {7: 1, 8: 1, 10: 6}


def test_free_hours_follow_custom_working_window() -> None:
    rules = SchedulingRules(working_day_start_hour=9, working_day_end_hour=17, max_reservation_hours=3)

    result = halls_free_hours_by_day(date(2015, 1, 2), date(2015, 1, 1), RESERVATIONS, HALLS, rules)

    assert {item.hall_number: item.free_hours for item in result} == {201: 8, 202: 5}
