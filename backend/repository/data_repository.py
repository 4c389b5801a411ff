"""Repository layer responsible for all database access."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from backend.domain.models import LectureHall, Lecturer, Reservation
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


_RESERVATION_SELECT = """
    SELECT
        r.id,
        r.start_time,
        r.end_time,
        r.lecture_hall_number,
        l.id AS lecturer_id,
        l.name AS lecturer_name,
        l.surname AS lecturer_surname
    FROM Reservations AS r
    INNER JOIN Lecturers AS l ON l.id = r.lecturer_id
"""


def _to_reservation(row: sqlite3.Row) -> Reservation:
    return Reservation(
        reservation_id=int(row["id"]),
        hall=LectureHall(number=int(row["lecture_hall_number"])),
        lecturer=Lecturer(
            lecturer_id=int(row["lecturer_id"]),
            name=str(row["lecturer_name"]),
            surname=str(row["lecturer_surname"]),
        ),
        start_time=datetime.fromisoformat(str(row["start_time"])),
        end_time=datetime.fromisoformat(str(row["end_time"])),
    )


class DataRepository:
    """Encapsulates SQLite access so the scheduling core stays storage-agnostic."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_path = Path(self._settings.database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON;")
        return connection

    def initialize_database(self) -> None:
        """Create all persistence artifacts before API startup."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS LectureHalls (
                        number INTEGER PRIMARY KEY
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Lecturers (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        surname TEXT NOT NULL
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Reservations (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        lecture_hall_number INTEGER NOT NULL,
                        lecturer_id INTEGER NOT NULL,
                        start_time TEXT NOT NULL,
                        end_time TEXT NOT NULL,
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                        FOREIGN KEY (lecture_hall_number) REFERENCES LectureHalls(number),
                        FOREIGN KEY (lecturer_id) REFERENCES Lecturers(id)
                    );
                    """
                )

                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_reservations_hall_start
                    ON Reservations(lecture_hall_number, start_time);
                    """
                )
                conn.commit()
            logger.info("Database initialized at %s", self._db_path)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Database initialization failed: {exc}") from exc

    def seed_demo_data(self) -> int:
        """Seed halls and lecturers only when no hall is registered yet.

        Returns the number of halls inserted.
        """
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute("SELECT COUNT(*) AS count FROM LectureHalls;")
                hall_count = int(cursor.fetchone()["count"])
                if hall_count > 0:
                    logger.info("Demo data already present; skipping seed")
                    return 0

                cursor.executemany(
                    "INSERT INTO LectureHalls (number) VALUES (?);",
                    [(number,) for number in self._settings.seed_lecture_hall_numbers],
                )
                cursor.executemany(
                    "INSERT INTO Lecturers (name, surname) VALUES (?, ?);",
                    list(self._settings.seed_lecturers),
                )
                conn.commit()
            logger.info(
                "Demo seed completed | halls=%s | lecturers=%s",
                len(self._settings.seed_lecture_hall_numbers),
                len(self._settings.seed_lecturers),
            )
            return len(self._settings.seed_lecture_hall_numbers)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Demo data seeding failed: {exc}") from exc

    def create_lecture_hall(self, number: int) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO LectureHalls (number) VALUES (?);",
                (number,),
            )
            conn.commit()

    def create_lecturer(self, name: str, surname: str) -> int:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO Lecturers (name, surname) VALUES (?, ?);",
                (name, surname),
            )
            conn.commit()
            return int(cursor.lastrowid)

    def list_lecture_halls(self) -> list[LectureHall]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT number FROM LectureHalls ORDER BY number ASC;")
            return [LectureHall(number=int(row["number"])) for row in cursor.fetchall()]

    def list_lecturers(self) -> list[Lecturer]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, surname FROM Lecturers ORDER BY id ASC;")
            return [
                Lecturer(
                    lecturer_id=int(row["id"]),
                    name=str(row["name"]),
                    surname=str(row["surname"]),
                )
                for row in cursor.fetchall()
            ]

    def list_reservations(self) -> list[Reservation]:
        """Return every stored reservation; filtering happens in the services."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(_RESERVATION_SELECT + " ORDER BY r.id ASC;")
            return [_to_reservation(row) for row in cursor.fetchall()]

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(_RESERVATION_SELECT + " WHERE r.id = ?;", (reservation_id,))
            row = cursor.fetchone()
            if row is None:
                return None
            return _to_reservation(row)

    def add_reservation(
        self,
        start_time: datetime,
        end_time: datetime,
        lecture_hall_number: int,
        lecturer_id: int,
    ) -> int:
        """Insert reservation row and return the created id."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO Reservations (
                    lecture_hall_number,
                    lecturer_id,
                    start_time,
                    end_time
                )
                VALUES (?, ?, ?, ?);
                """,
                (
                    lecture_hall_number,
                    lecturer_id,
                    start_time.isoformat(),
                    end_time.isoformat(),
                ),
            )
            conn.commit()
            return int(cursor.lastrowid)

    def delete_reservation(self, reservation_id: int) -> None:
        """Delete by id; a missing id is a no-op."""
        with self._connect() as conn:
            conn.execute("DELETE FROM Reservations WHERE id = ?;", (reservation_id,))
            conn.commit()

    def count_reservations(self) -> int:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM Reservations;")
            return int(cursor.fetchone()["count"])
