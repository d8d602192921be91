# examBot - Discord Exam Countdown Bot
# Copyright (c) 2025-2026 Slash Daemon slashdaemon@protonmail.com
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Commercial licensing: [slashdaemon@protonmail.com]

"""
Exam Store Module

Handles database operations for exam records.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

import asyncpg

from .clock import ReferenceClock
from .dates import format_exam_date, from_storage, parse_exam_date, to_storage
from .errors import (
    ExamExistsError,
    ExamNotFoundError,
    PastDateError,
    StoreUnavailableError,
)

logger = logging.getLogger("examBot.exams.store")

# Failures that mean the database, not the caller, is at fault
DATABASE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


@dataclass(frozen=True)
class ExamRecord:
    """A named exam and the instant it is due."""

    name: str
    date: datetime


class ExamStore:
    """
    Owns the persisted set of exam records.

    Dates are validated against the reference clock before anything is
    written: unparseable text and dates strictly before now are rejected.
    """

    def __init__(self, db_pool: asyncpg.Pool, clock: ReferenceClock):
        """
        Initialize the exam store.

        Args:
            db_pool: asyncpg connection pool
            clock: Clock used for past-date checks
        """
        self.db = db_pool
        self.clock = clock

    async def ensure_schema(self) -> None:
        """Create the exams table if it does not exist yet."""
        await self._execute(
            """
            CREATE TABLE IF NOT EXISTS exams (
                name TEXT PRIMARY KEY,
                date TEXT NOT NULL
            )
            """
        )
        logger.info("Exam schema ready")

    def _validated_date(self, date_text: str) -> datetime:
        now, zone = self.clock.resolve()
        date = parse_exam_date(date_text, zone)
        if date < now:
            logger.warning(f"Rejected past date {date_text} (now={now.isoformat()})")
            raise PastDateError(f"{date_text} is in the past")
        return date

    async def add_exam(self, name: str, date_text: str) -> ExamRecord:
        """
        Create a new exam.

        Args:
            name: Unique exam name
            date_text: Due date as dd.mm.yyyy

        Returns:
            The stored record

        Raises:
            InvalidDateFormatError: If date_text is malformed
            PastDateError: If the date is before now
            ExamExistsError: If name is already taken
            StoreUnavailableError: On database failure
        """
        date = self._validated_date(date_text)

        # Existence check and insert happen in one statement
        result = await self._execute(
            """
            INSERT INTO exams (name, date) VALUES ($1, $2)
            ON CONFLICT (name) DO NOTHING
            """,
            name,
            to_storage(date),
        )
        if result != "INSERT 0 1":
            logger.warning(f"Exam {name!r} already exists")
            raise ExamExistsError(f"Exam {name!r} already exists")

        logger.info(f"Added exam {name!r} for {format_exam_date(date)}")
        return ExamRecord(name=name, date=date)

    async def get_exam(self, name: str) -> ExamRecord:
        """
        Get an exam by name.

        Raises:
            ExamNotFoundError: If no exam has this name
            StoreUnavailableError: On database failure
        """
        row = await self._fetchrow(
            "SELECT name, date FROM exams WHERE name = $1",
            name,
        )
        if row is None:
            logger.warning(f"Exam {name!r} not found")
            raise ExamNotFoundError(f"Exam {name!r} not found")

        return self._to_record(row)

    async def update_exam(self, name: str, date_text: str) -> ExamRecord:
        """
        Move an existing exam to a new date.

        Raises:
            InvalidDateFormatError: If date_text is malformed
            PastDateError: If the date is before now
            ExamNotFoundError: If no exam has this name
            StoreUnavailableError: On database failure
        """
        date = self._validated_date(date_text)

        result = await self._execute(
            "UPDATE exams SET date = $2 WHERE name = $1",
            name,
            to_storage(date),
        )
        if result != "UPDATE 1":
            logger.warning(f"Exam {name!r} not found for update")
            raise ExamNotFoundError(f"Exam {name!r} not found")

        logger.info(f"Updated exam {name!r} to {format_exam_date(date)}")
        return ExamRecord(name=name, date=date)

    async def delete_exam(self, name: str) -> None:
        """
        Delete an exam.

        Raises:
            ExamNotFoundError: If no exam has this name
            StoreUnavailableError: On database failure
        """
        result = await self._execute("DELETE FROM exams WHERE name = $1", name)
        if result != "DELETE 1":
            logger.warning(f"Exam {name!r} not found for deletion")
            raise ExamNotFoundError(f"Exam {name!r} not found")

        logger.info(f"Deleted exam {name!r}")

    async def list_exams(self) -> list[ExamRecord]:
        """
        List all exams, soonest first.

        Returns:
            List of records (empty if none are scheduled)
        """
        rows = await self._fetch("SELECT name, date FROM exams")
        exams = sorted(
            (self._to_record(row) for row in rows),
            key=lambda exam: (exam.date, exam.name),
        )
        logger.info(f"Listed {len(exams)} exam(s)")
        return exams

    # =========================================================================
    # Database helpers
    # =========================================================================

    def _to_record(self, row) -> ExamRecord:
        try:
            date = from_storage(row["date"])
        except ValueError as e:
            logger.error(f"Corrupt date for exam {row['name']!r}: {e}")
            raise StoreUnavailableError(f"Corrupt date for exam {row['name']!r}") from e
        return ExamRecord(name=row["name"], date=date)

    async def _execute(self, query: str, *args) -> str:
        try:
            return await self.db.execute(query, *args)
        except DATABASE_ERRORS as e:
            logger.error(f"Database execute failed: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e

    async def _fetchrow(self, query: str, *args):
        try:
            return await self.db.fetchrow(query, *args)
        except DATABASE_ERRORS as e:
            logger.error(f"Database fetchrow failed: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e

    async def _fetch(self, query: str, *args) -> list:
        try:
            return await self.db.fetch(query, *args)
        except DATABASE_ERRORS as e:
            logger.error(f"Database fetch failed: {e}", exc_info=True)
            raise StoreUnavailableError(str(e)) from e
