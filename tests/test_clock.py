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

"""Tests for the reference clock and its timezone fallback."""

import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import pytz

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from exams import ReferenceClock, is_summer_time

WINTER = datetime(2026, 1, 15, 12, 0, tzinfo=pytz.UTC)
SUMMER = datetime(2026, 7, 15, 12, 0, tzinfo=pytz.UTC)


class TestResolve:
    """Test resolving now in the named zone."""

    def test_default_zone_is_berlin(self):
        clock = ReferenceClock(now_fn=lambda: WINTER)
        _, zone = clock.resolve()
        assert zone.zone == "Europe/Berlin"

    def test_now_expressed_in_zone(self):
        clock = ReferenceClock("Europe/Berlin", now_fn=lambda: WINTER)
        now, _ = clock.resolve()
        assert now == WINTER
        assert now.hour == 13
        assert now.utcoffset() == timedelta(hours=1)

    def test_summer_offset_from_tz_database(self):
        clock = ReferenceClock("Europe/Berlin", now_fn=lambda: SUMMER)
        now = clock.now()
        assert now.hour == 14
        assert now.utcoffset() == timedelta(hours=2)

    def test_other_named_zone(self):
        clock = ReferenceClock("America/New_York", now_fn=lambda: WINTER)
        now, zone = clock.resolve()
        assert zone.zone == "America/New_York"
        assert now.hour == 7


class TestFallback:
    """Test the fixed-offset fallback for unknown zones."""

    def test_fallback_winter_offset(self):
        clock = ReferenceClock("Nowhere/Atlantis", now_fn=lambda: WINTER)
        now, _ = clock.resolve()
        assert now == WINTER
        assert now.utcoffset() == timedelta(hours=1)

    def test_fallback_summer_offset(self):
        clock = ReferenceClock("Nowhere/Atlantis", now_fn=lambda: SUMMER)
        now, _ = clock.resolve()
        assert now.utcoffset() == timedelta(hours=2)

    def test_fallback_logs_error(self, caplog):
        clock = ReferenceClock("Nowhere/Atlantis", now_fn=lambda: WINTER)
        with caplog.at_level(logging.ERROR, logger="examBot.exams.clock"):
            clock.resolve()
        assert "Nowhere/Atlantis" in caplog.text
        assert "CET" in caplog.text

    def test_known_zone_does_not_log(self, caplog):
        clock = ReferenceClock("Europe/Berlin", now_fn=lambda: WINTER)
        with caplog.at_level(logging.ERROR, logger="examBot.exams.clock"):
            clock.resolve()
        assert caplog.records == []

    def test_fallback_zone_can_localize(self):
        clock = ReferenceClock("Nowhere/Atlantis", now_fn=lambda: WINTER)
        zone = clock.zone()
        local = zone.localize(datetime(2026, 2, 1))
        assert local.utcoffset() == timedelta(hours=1)


class TestSummerTimeHeuristic:
    """Test the EU summer time approximation (2026: 29 March to 25 October)."""

    @pytest.mark.parametrize(
        "moment,expected",
        [
            (datetime(2026, 3, 28, 12, 0, tzinfo=pytz.UTC), False),
            (datetime(2026, 3, 29, 12, 0, tzinfo=pytz.UTC), True),
            (datetime(2026, 10, 24, 12, 0, tzinfo=pytz.UTC), True),
            (datetime(2026, 10, 25, 12, 0, tzinfo=pytz.UTC), False),
            (datetime(2026, 12, 31, 23, 0, tzinfo=pytz.UTC), False),
        ],
    )
    def test_transition_days(self, moment, expected):
        assert is_summer_time(moment) is expected

    def test_uses_utc_date(self):
        # 28 March 23:30 UTC is already 29 March in Berlin
        moment = pytz.timezone("Europe/Berlin").localize(datetime(2026, 3, 29, 0, 30))
        assert is_summer_time(moment) is False
