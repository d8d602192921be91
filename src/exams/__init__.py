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
Exams Package

Exam record storage, date handling, and countdown computation.
"""

from .clock import DEFAULT_TIMEZONE, ReferenceClock, is_summer_time
from .config import BotConfig, ConfigError
from .countdown import Countdown, time_left
from .dates import DATE_HINT, format_exam_date, from_storage, parse_exam_date, to_storage
from .errors import (
    ExamError,
    ExamErrorKind,
    ExamExistsError,
    ExamNotFoundError,
    InvalidDateFormatError,
    PastDateError,
    StoreUnavailableError,
)
from .store import ExamRecord, ExamStore

__all__ = [
    "DEFAULT_TIMEZONE",
    "ReferenceClock",
    "is_summer_time",
    "BotConfig",
    "ConfigError",
    "Countdown",
    "time_left",
    "DATE_HINT",
    "format_exam_date",
    "from_storage",
    "parse_exam_date",
    "to_storage",
    "ExamError",
    "ExamErrorKind",
    "ExamExistsError",
    "ExamNotFoundError",
    "InvalidDateFormatError",
    "PastDateError",
    "StoreUnavailableError",
    "ExamRecord",
    "ExamStore",
]
