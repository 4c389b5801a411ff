"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    database_path: Path
    log_level: str
    working_day_start_hour: int
    working_day_end_hour: int
    max_reservation_hours: int
    seed_lecture_hall_numbers: tuple[int, ...]
    seed_lecturers: tuple[tuple[str, str], ...]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; tests derive variants with `replace`."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Lecture Hall Reservations"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        database_path=Path(os.getenv("DATABASE_PATH", "data/reservations.db")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        working_day_start_hour=_env_int("WORKING_DAY_START_HOUR", 8),
        working_day_end_hour=_env_int("WORKING_DAY_END_HOUR", 18),
        max_reservation_hours=_env_int("MAX_RESERVATION_HOURS", 3),
        seed_lecture_hall_numbers=(101, 102, 105, 201, 202, 203, 301, 302),
        seed_lecturers=(
            ("Jan", "Kowalski"),
            ("Anna", "Nowak"),
            ("Piotr", "Wisniewski"),
        ),
    )
