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
examBot Discord Bot

Maintains the Discord connection and feeds "!" commands to the exam
command router. Replies are sent back to the channel the command came from.
"""

import asyncio
import logging
import sys
from typing import Optional

import asyncpg
import discord
from dotenv import load_dotenv

from commands.exam_commands import ExamCommandRouter
from exams import BotConfig, ConfigError, ExamStore, ReferenceClock

load_dotenv()

# Discord message length limit
DISCORD_MAX_LENGTH = 2000

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("examBot")


def configure_logging(log_path: Optional[str] = None, level: int = logging.INFO) -> None:
    """
    Send log records to stdout and, if given, append them to log_path.

    Args:
        log_path: File to append to
        level: Root log level
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_path:
        handlers.append(logging.FileHandler(log_path, mode="a", encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


class ExamBot(discord.Client):
    """Discord client that answers exam countdown commands."""

    def __init__(self, config: BotConfig, router: Optional[ExamCommandRouter] = None):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True
        intents.messages = True

        super().__init__(intents=intents)

        self.config = config
        self.router = router
        self.db_pool: Optional[asyncpg.Pool] = None

    async def setup_hook(self):
        """Called when the bot is starting up."""
        if self.router is not None:
            logger.info("Router injected, skipping database setup")
            return

        logger.info(f"Setup: env={self.config.env}, timezone={self.config.timezone}")
        try:
            self.db_pool = await asyncpg.create_pool(self.config.database_url)
            store = ExamStore(self.db_pool, ReferenceClock(self.config.timezone))
            await store.ensure_schema()
        except Exception as e:
            logger.error(f"Failed to initialize exam database: {e}", exc_info=True)
            raise

        self.router = ExamCommandRouter(store, store.clock)
        logger.info("Exam store initialized successfully")

    async def on_ready(self):
        """Called when the bot has connected to Discord."""
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info(f"Connected to {len(self.guilds)} guild(s)")

    async def on_message(self, message: discord.Message):
        """Route "!" commands and send back the reply."""
        # Ignore messages from the bot itself
        if message.author == self.user:
            return
        if self.router is None:
            return

        reply = await self.router.handle(message.content, author=str(message.author))
        if reply is None:
            return

        try:
            await self._send_chunked(message.channel, reply)
        except discord.HTTPException as e:
            logger.error(f"Failed to send reply in channel {message.channel.id}: {e}")

    def _chunk_message(self, content: str) -> list[str]:
        """Split a reply into chunks that fit Discord's 2000 char limit, on line breaks."""
        chunks = []
        remaining = content

        while len(remaining) > DISCORD_MAX_LENGTH:
            break_at = remaining.rfind("\n", 0, DISCORD_MAX_LENGTH)
            if break_at <= 0:
                break_at = DISCORD_MAX_LENGTH
            chunks.append(remaining[:break_at].rstrip())
            remaining = remaining[break_at:].lstrip("\n")

        if remaining:
            chunks.append(remaining)
        return chunks

    async def _send_chunked(self, channel: discord.abc.Messageable, content: str) -> None:
        for chunk in self._chunk_message(content):
            await channel.send(chunk)

    async def close(self):
        """Clean up resources on shutdown."""
        if self.db_pool:
            await self.db_pool.close()
            logger.info("Database pool closed")
        await super().close()


async def main():
    """Run the bot."""
    config = BotConfig.from_env()
    try:
        config.validate()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please set it in your .env file", file=sys.stderr)
        return

    configure_logging(config.log_path)
    logger.info("Starting examBot")

    bot = ExamBot(config)
    async with bot:
        await bot.start(config.bot_token)
    logger.info("examBot stopped")


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
