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
Countdown Calculator

Splits the time remaining until an exam into days, hours and minutes.
"""

from dataclasses import dataclass
from datetime import datetime

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


@dataclass(frozen=True)
class Countdown:
    """Time left until an exam. Fields are zero once the exam has passed."""

    passed: bool
    days: int = 0
    hours: int = 0
    minutes: int = 0


def time_left(exam_date: datetime, now: datetime) -> Countdown:
    """
    Compute the countdown from now until exam_date.

    Both datetimes must be timezone-aware. Partial minutes are dropped, never
    rounded up.

    Args:
        exam_date: When the exam is due
        now: Current time in the reference zone

    Returns:
        Countdown with passed=True if exam_date is before now
    """
    remaining = exam_date - now
    if remaining.total_seconds() < 0:
        return Countdown(passed=True)

    total_minutes = int(remaining.total_seconds()) // 60
    return Countdown(
        passed=False,
        days=total_minutes // MINUTES_PER_DAY,
        hours=(total_minutes // MINUTES_PER_HOUR) % 24,
        minutes=total_minutes % MINUTES_PER_HOUR,
    )
