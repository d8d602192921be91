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
Exam Text Commands

Maps "!command arg ..." lines from chat onto exam store operations and
renders the reply text. Knows nothing about Discord message objects.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from exams import (
    DATE_HINT,
    ExamError,
    ExamErrorKind,
    ExamStore,
    ReferenceClock,
    format_exam_date,
    time_left,
)

logger = logging.getLogger("examBot.commands.exam")

COMMAND_PREFIX = "!"


@dataclass
class ParsedCommand:
    """A tokenized command line."""

    name: str
    args: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CommandSpec:
    """Arity and usage text for one command."""

    min_tokens: int  # command word included
    usage: str


COMMANDS = {
    "add-exam": CommandSpec(3, f"Usage: !add-exam <exam_name> <{DATE_HINT}>"),
    "time-left": CommandSpec(2, "Usage: !time-left <exam_name>"),
    "delete-exam": CommandSpec(2, "Usage: !delete-exam <exam_name>"),
    "update-exam": CommandSpec(3, f"Usage: !update-exam <exam_name> <{DATE_HINT}>"),
    "list-exams": CommandSpec(1, "Usage: !list-exams"),
}

# Unhyphenated spellings accepted for compatibility
COMMAND_ALIASES = {
    "addexam": "add-exam",
    "timeleft": "time-left",
    "deleteexam": "delete-exam",
    "updateexam": "update-exam",
    "listexams": "list-exams",
}

ERROR_MESSAGES = {
    ExamErrorKind.INVALID_FORMAT: f"Invalid date format. Use {DATE_HINT}",
    ExamErrorKind.ALREADY_EXISTS: "Exam with this name already exists",
    ExamErrorKind.NOT_FOUND: "Exam not found",
}

PAST_DATE_MESSAGES = {
    "add-exam": "Cannot add exam in the past",
    "update-exam": "Cannot update exam to a past date",
}

STORE_ERROR_MESSAGES = {
    "add-exam": "Error adding exam",
    "time-left": "Error retrieving exam",
    "delete-exam": "Error deleting exam",
    "update-exam": "Error updating exam",
    "list-exams": "Error listing exams",
}


def tokenize(content: str) -> Optional[ParsedCommand]:
    """
    Split a chat line into a command name and its arguments.

    The whole line is lowercased, so exam names are stored lowercase.

    Returns:
        ParsedCommand, or None if the line is not a command
    """
    content = content.strip().lower()
    if not content.startswith(COMMAND_PREFIX):
        return None

    tokens = content.split()
    name = tokens[0][len(COMMAND_PREFIX):]
    if not name:
        return None
    return ParsedCommand(name=name, args=tokens[1:])


class ExamCommandRouter:
    """
    Dispatches text commands to the exam store.

    Commands:
    - !add-exam <name> <dd.mm.yyyy>
    - !time-left <name>
    - !delete-exam <name>
    - !update-exam <name> <dd.mm.yyyy>
    - !list-exams
    """

    def __init__(self, store: ExamStore, clock: ReferenceClock):
        self.store = store
        self.clock = clock
        self._handlers: dict[str, Callable[..., Awaitable[str]]] = {
            "add-exam": self.add_exam,
            "time-left": self.time_until,
            "delete-exam": self.delete_exam,
            "update-exam": self.update_exam,
            "list-exams": self.list_exams,
        }

    async def handle(self, content: str, author: str = "unknown") -> Optional[str]:
        """
        Run one command line.

        Args:
            content: Raw message text
            author: Display name of the sender, for logging

        Returns:
            Reply text, or None when nothing should be sent
        """
        parsed = tokenize(content)
        if parsed is None:
            return None

        command = COMMAND_ALIASES.get(parsed.name, parsed.name)
        spec = COMMANDS.get(command)
        if spec is None:
            logger.warning(f"Unknown command {parsed.name!r} from {author}")
            return None

        logger.info(f"Processing command {command} from {author}")

        if len(parsed.args) + 1 < spec.min_tokens:
            return spec.usage

        args = parsed.args[: spec.min_tokens - 1]
        try:
            return await self._handlers[command](*args)
        except ExamError as e:
            return self._error_reply(command, args, e)

    def _error_reply(self, command: str, args: list[str], error: ExamError) -> str:
        if error.kind == ExamErrorKind.STORE_UNAVAILABLE:
            logger.error(f"{command} {args} failed: {error}")
            return STORE_ERROR_MESSAGES[command]

        logger.warning(f"{command} {args} rejected ({error.kind.value}): {error}")
        if error.kind == ExamErrorKind.PAST_DATE:
            return PAST_DATE_MESSAGES[command]
        return ERROR_MESSAGES[error.kind]

    # =========================================================================
    # Command handlers
    # =========================================================================

    async def add_exam(self, name: str, date_text: str) -> str:
        exam = await self.store.add_exam(name, date_text)
        return f"Exam {exam.name} added for {format_exam_date(exam.date)}"

    async def time_until(self, name: str) -> str:
        exam = await self.store.get_exam(name)
        now, _ = self.clock.resolve()
        countdown = time_left(exam.date, now)

        if countdown.passed:
            logger.info(f"Exam {name!r} has passed")
            return f"Exam {exam.name} has already passed"

        logger.info(
            f"Time left for {name!r}: {countdown.days}d {countdown.hours}h {countdown.minutes}m"
        )
        return (
            f"Time until {exam.name}: {countdown.days} days, "
            f"{countdown.hours} hours, {countdown.minutes} minutes"
        )

    async def delete_exam(self, name: str) -> str:
        await self.store.delete_exam(name)
        return f"Exam {name} deleted"

    async def update_exam(self, name: str, date_text: str) -> str:
        exam = await self.store.update_exam(name, date_text)
        return f"Exam {exam.name} updated to {format_exam_date(exam.date)}"

    async def list_exams(self) -> str:
        exams = await self.store.list_exams()
        if not exams:
            return "No exams scheduled"

        lines = ["Scheduled exams:"]
        lines.extend(f"- {exam.name}: {format_exam_date(exam.date)}" for exam in exams)
        return "\n".join(lines)
