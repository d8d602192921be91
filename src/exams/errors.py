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
Exam Errors

Tagged error kinds raised by the date codec and the exam store.
"""

from enum import Enum


class ExamErrorKind(str, Enum):
    """Machine-readable category of an exam operation failure."""

    INVALID_FORMAT = "invalid_format"
    PAST_DATE = "past_date"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    STORE_UNAVAILABLE = "store_unavailable"


class ExamError(Exception):
    """Base exception for exam operations."""

    kind: ExamErrorKind = ExamErrorKind.STORE_UNAVAILABLE


class InvalidDateFormatError(ExamError):
    """Raised when a date string is not a valid dd.mm.yyyy date."""

    kind = ExamErrorKind.INVALID_FORMAT


class PastDateError(ExamError):
    """Raised when an exam date lies before the current instant."""

    kind = ExamErrorKind.PAST_DATE


class ExamExistsError(ExamError):
    """Raised when adding an exam whose name is already taken."""

    kind = ExamErrorKind.ALREADY_EXISTS


class ExamNotFoundError(ExamError):
    """Raised when no exam with the given name exists."""

    kind = ExamErrorKind.NOT_FOUND


class StoreUnavailableError(ExamError):
    """Raised when the underlying database fails."""

    kind = ExamErrorKind.STORE_UNAVAILABLE
