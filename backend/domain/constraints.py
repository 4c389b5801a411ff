"""Scheduling rule parameters shared by validation and free-hours reporting."""

from __future__ import annotations

from dataclasses import dataclass

from backend.utils.config import Settings


@dataclass(frozen=True)
class SchedulingRules:
    working_day_start_hour: int = 8
    working_day_end_hour: int = 18
    max_reservation_hours: int = 3

    @property
    def working_day_capacity(self) -> int:
        return self.working_day_end_hour - self.working_day_start_hour

    @classmethod
    def from_settings(cls, settings: Settings) -> "SchedulingRules":
        rules = cls(
            working_day_start_hour=settings.working_day_start_hour,
            working_day_end_hour=settings.working_day_end_hour,
            max_reservation_hours=settings.max_reservation_hours,
        )
        validate_scheduling_rules(rules)
        return rules


def validate_scheduling_rules(rules: SchedulingRules) -> None:
    if not 0 <= rules.working_day_start_hour <= 24:
        raise ValueError("working_day_start_hour must be between 0 and 24")
    if not 0 <= rules.working_day_end_hour <= 24:
        raise ValueError("working_day_end_hour must be between 0 and 24")
    if rules.working_day_start_hour >= rules.working_day_end_hour:
        raise ValueError("working_day_start_hour must be before working_day_end_hour")
    if rules.max_reservation_hours <= 0:
        raise ValueError("max_reservation_hours must be > 0")
    if rules.max_reservation_hours > rules.working_day_capacity:
        raise ValueError("max_reservation_hours must fit inside the working day")
