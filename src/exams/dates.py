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
Exam Date Codec

Converts between the user-facing dd.mm.yyyy form, aware datetimes, and the
ISO-8601 string persisted in the database.
"""

import re
from datetime import datetime
from typing import Optional

import pytz

from .errors import InvalidDateFormatError, PastDateError

DATE_FORMAT = "%d.%m.%Y"
DATE_HINT = "dd.mm.yyyy"

_DATE_PATTERN = re.compile(r"(\d{2})\.(\d{2})\.(\d{4})", re.ASCII)


def parse_exam_date(text: str, zone: pytz.BaseTzInfo) -> datetime:
    """
    Parse a dd.mm.yyyy string into midnight of that day in the given zone.

    Args:
        text: Date text as typed by the user
        zone: Reference timezone

    Returns:
        Timezone-aware datetime

    Raises:
        InvalidDateFormatError: If the text is not a real dd.mm.yyyy date
    """
    match = _DATE_PATTERN.fullmatch(text)
    if not match:
        raise InvalidDateFormatError(f"Cannot parse {text!r} as {DATE_HINT}")

    day, month, year = (int(part) for part in match.groups())
    try:
        naive = datetime(year, month, day)
    except ValueError as e:
        raise InvalidDateFormatError(f"Cannot parse {text!r} as {DATE_HINT}: {e}")

    try:
        return zone.localize(naive)
    except OverflowError as e:
        # Shifting by the zone offset left the datetime range
        if year == datetime.min.year:
            raise PastDateError(f"{text} is in the past") from e
        raise InvalidDateFormatError(f"{text} is outside the supported date range") from e


def format_exam_date(moment: datetime, zone: Optional[pytz.BaseTzInfo] = None) -> str:
    """Render a datetime as dd.mm.yyyy, converting into zone first if given."""
    if zone is not None:
        moment = moment.astimezone(zone)
    return moment.strftime(DATE_FORMAT)


def to_storage(moment: datetime) -> str:
    """Serialize an aware datetime for persistence."""
    if moment.tzinfo is None:
        raise ValueError("Refusing to store a naive datetime")
    return moment.isoformat()


def from_storage(value: str) -> datetime:
    """
    Deserialize a persisted timestamp.

    Raises:
        ValueError: If the value is not an offset-aware ISO-8601 timestamp
    """
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        raise ValueError(f"Stored timestamp {value!r} has no UTC offset")
    return moment
