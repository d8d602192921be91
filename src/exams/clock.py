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
Reference Clock Module

Resolves "now" in the timezone that governs exam deadlines.

If the named zone cannot be loaded (e.g. missing tz database on the host),
a fixed UTC offset is used instead. Whether summer time applies is guessed
from the EU rule (last Sunday of March to last Sunday of October) by UTC
calendar date only, so the fallback can be off by an hour on the two
transition days.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

import pytz

logger = logging.getLogger("examBot.exams.clock")

DEFAULT_TIMEZONE = "Europe/Berlin"

# Fallback offsets in minutes east of UTC
SUMMER_OFFSET_MINUTES = 120  # CEST
WINTER_OFFSET_MINUTES = 60  # CET


def _last_sunday(year: int, month: int) -> date:
    """Return the last Sunday of a month that has 31 days."""
    last_day = date(year, month, 31)
    return last_day - timedelta(days=(last_day.weekday() + 1) % 7)


def is_summer_time(moment: datetime) -> bool:
    """
    Approximate whether EU summer time is in effect at a UTC moment.

    Args:
        moment: Timezone-aware datetime

    Returns:
        True between the last Sunday of March and the last Sunday of October
    """
    day = moment.astimezone(pytz.UTC).date()
    return _last_sunday(day.year, 3) <= day < _last_sunday(day.year, 10)


def _utc_now() -> datetime:
    return datetime.now(pytz.UTC)


class ReferenceClock:
    """
    Clock bound to a single reference timezone.

    Args:
        zone_name: IANA timezone name used for every exam comparison
        now_fn: Factory returning the current time as an aware datetime.
            Tests pass a fixed value here.
    """

    def __init__(
        self,
        zone_name: str = DEFAULT_TIMEZONE,
        now_fn: Optional[Callable[[], datetime]] = None,
    ):
        self.zone_name = zone_name
        self._now_fn = now_fn or _utc_now

    def zone(self, at: Optional[datetime] = None) -> pytz.BaseTzInfo:
        """
        Load the reference timezone, falling back to a fixed offset.

        Args:
            at: Moment used to pick the fallback offset (defaults to now)

        Returns:
            A pytz timezone; never raises
        """
        try:
            return pytz.timezone(self.zone_name)
        except pytz.UnknownTimeZoneError as e:
            at = at or self._now_fn()
            if is_summer_time(at):
                offset, label = SUMMER_OFFSET_MINUTES, "CEST"
            else:
                offset, label = WINTER_OFFSET_MINUTES, "CET"
            logger.error(
                f"Failed to load timezone {self.zone_name!r} ({e}), "
                f"falling back to fixed {label} offset"
            )
            return pytz.FixedOffset(offset)

    def resolve(self) -> tuple[datetime, pytz.BaseTzInfo]:
        """
        Get the current time in the reference zone.

        Returns:
            Tuple of (now, zone) where now is expressed in zone
        """
        now = self._now_fn()
        zone = self.zone(now)
        return now.astimezone(zone), zone

    def now(self) -> datetime:
        """Current time in the reference zone."""
        return self.resolve()[0]
