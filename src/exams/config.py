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
Bot Configuration

Runtime settings for examBot, read from environment variables (a .env file
is loaded by the entry point).
"""

import os
from dataclasses import dataclass

from .clock import DEFAULT_TIMEZONE


class ConfigError(Exception):
    """Raised when a required setting is missing."""

    pass


@dataclass
class BotConfig:
    """Configuration for the exam bot."""

    bot_token: str = ""
    database_url: str = ""
    log_path: str = "exambot.log"
    timezone: str = DEFAULT_TIMEZONE
    env: str = "local"

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Create config from environment variables with defaults."""
        return cls(
            bot_token=os.getenv("DISCORD_BOT_TOKEN", ""),
            database_url=os.getenv("DATABASE_URL", ""),
            log_path=os.getenv("EXAM_LOG_PATH", "exambot.log"),
            timezone=os.getenv("EXAM_TIMEZONE", DEFAULT_TIMEZONE),
            env=os.getenv("BOT_ENV", "local"),
        )

    def validate(self) -> None:
        """
        Check that required settings are present.

        Raises:
            ConfigError: Naming the first missing setting
        """
        if not self.bot_token:
            raise ConfigError("DISCORD_BOT_TOKEN is required")
        if not self.database_url:
            raise ConfigError("DATABASE_URL is required")
