"""Domain models for lecture hall reservations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Flag, auto


@dataclass(frozen=True)
class LectureHall:
    number: int


@dataclass(frozen=True)
class Lecturer:
    lecturer_id: int
    name: str = ""
    surname: str = ""


@dataclass(frozen=True)
class Reservation:
    reservation_id: int
    hall: LectureHall
    lecturer: Lecturer
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class NewReservation:
    """A proposed booking referencing its hall and lecturer by key."""

    start_time: datetime
    end_time: datetime
    lecture_hall_number: int
    lecturer_id: int


class ValidationResult(Flag):
    OK = auto()
    MORE_THAN_ONE_DAY = auto()
    TO_BEFORE_FROM = auto()
    OUTSIDE_WORKING_HOURS = auto()
    TOO_LONG = auto()
    CONFLICTING = auto()
    LECTURER_DOES_NOT_EXIST = auto()
    HALL_DOES_NOT_EXIST = auto()


VIOLATIONS = (
    ValidationResult.MORE_THAN_ONE_DAY,
    ValidationResult.TO_BEFORE_FROM,
    ValidationResult.OUTSIDE_WORKING_HOURS,
    ValidationResult.TOO_LONG,
    ValidationResult.CONFLICTING,
    ValidationResult.LECTURER_DOES_NOT_EXIST,
    ValidationResult.HALL_DOES_NOT_EXIST,
)


@dataclass(frozen=True)
class ValidationOutcome:
    """Every rule a proposal violates, collected in one value.

    `violations` never carries the OK bit; `result` adds it only when the
    proposal is admitted.
    """

    violations: ValidationResult = ValidationResult(0)

    @property
    def admitted(self) -> bool:
        return not self.violations

    @property
    def result(self) -> ValidationResult:
        if self.admitted:
            return ValidationResult.OK
        return self.violations

    @property
    def reasons(self) -> list[str]:
        return [
            str(violation.name)
            for violation in VIOLATIONS
            if violation in self.violations
        ]


@dataclass(frozen=True)
class HallFreeHoursStatistic:
    hall_number: int
    free_hours: int
