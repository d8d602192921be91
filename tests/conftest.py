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

"""Shared fixtures for exam tests."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import pytz

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exams import ExamStore, ReferenceClock

# 13:00 in Berlin (CET)
FIXED_NOW = datetime(2026, 3, 10, 12, 0, tzinfo=pytz.UTC)


class FakeNow:
    """Settable replacement for the clock's now_fn."""

    def __init__(self, current: datetime = FIXED_NOW):
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class FakePool:
    """
    In-memory stand-in for asyncpg.Pool.

    Understands only the statements ExamStore issues and returns the same
    status strings asyncpg does.
    """

    def __init__(self):
        self.rows: dict[str, str] = {}
        self.queries: list[str] = []
        self.error: Exception | None = None

    def _record(self, query: str) -> str:
        query = " ".join(query.split())
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return query

    async def execute(self, query: str, *args) -> str:
        query = self._record(query)
        if query.startswith("CREATE TABLE"):
            return "CREATE TABLE"
        if query.startswith("INSERT INTO exams"):
            name, date = args
            if name in self.rows:
                return "INSERT 0 0"
            self.rows[name] = date
            return "INSERT 0 1"
        if query.startswith("UPDATE exams"):
            name, date = args
            if name not in self.rows:
                return "UPDATE 0"
            self.rows[name] = date
            return "UPDATE 1"
        if query.startswith("DELETE FROM exams"):
            (name,) = args
            if self.rows.pop(name, None) is None:
                return "DELETE 0"
            return "DELETE 1"
        raise AssertionError(f"Unexpected statement: {query}")

    async def fetchrow(self, query: str, *args):
        self._record(query)
        (name,) = args
        if name not in self.rows:
            return None
        return {"name": name, "date": self.rows[name]}

    async def fetch(self, query: str, *args):
        self._record(query)
        return [{"name": name, "date": date} for name, date in self.rows.items()]

    async def close(self):
        pass


@pytest.fixture
def fake_now():
    return FakeNow()


@pytest.fixture
def clock(fake_now):
    return ReferenceClock("Europe/Berlin", now_fn=fake_now)


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def store(pool, clock):
    return ExamStore(pool, clock)
