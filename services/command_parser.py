"""
Parsing for the text that follows `/ttt`.

The first word picks the command. `start` needs an `@username` and
`play` needs a cell index; the other commands take no arguments.
Anything that does not parse becomes a `help` command carrying the
reason, so malformed input never reaches the game service.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from utils.validation import is_valid_user_name, parse_cell_index


class CommandName(str, Enum):
    START = "start"
    PLAY = "play"
    STATUS = "status"
    HISTORY = "history"
    END = "end"
    HELP = "help"


class HelpReason(str, Enum):
    REQUESTED = "requested"
    UNKNOWN_COMMAND = "unknown_command"
    MISSING_OPPONENT = "missing_opponent"
    SELF_CHALLENGE = "self_challenge"
    BAD_MOVE = "bad_move"


@dataclass(frozen=True)
class ParsedCommand:
    name: CommandName
    opponent: Optional[str] = None
    index: Optional[int] = None
    help_reason: Optional[HelpReason] = None

    @property
    def is_help(self) -> bool:
        return self.name is CommandName.HELP


def _help(reason: HelpReason) -> ParsedCommand:
    return ParsedCommand(CommandName.HELP, help_reason=reason)


def parse_command(text: str, user_name: str) -> ParsedCommand:
    args = (text or "").split()
    if not args:
        return _help(HelpReason.REQUESTED)

    try:
        name = CommandName(args[0].lower())
    except ValueError:
        return _help(HelpReason.UNKNOWN_COMMAND)

    if name is CommandName.START:
        if len(args) < 2 or not args[1].startswith("@"):
            return _help(HelpReason.MISSING_OPPONENT)
        opponent = args[1][1:]
        if not is_valid_user_name(opponent):
            return _help(HelpReason.MISSING_OPPONENT)
        if opponent == user_name:
            return _help(HelpReason.SELF_CHALLENGE)
        return ParsedCommand(name, opponent=opponent)

    if name is CommandName.PLAY:
        if len(args) < 2:
            return _help(HelpReason.REQUESTED)
        index = parse_cell_index(args[1])
        if index is None:
            return _help(HelpReason.BAD_MOVE)
        return ParsedCommand(name, index=index)

    if name is CommandName.HELP:
        return _help(HelpReason.REQUESTED)
    return ParsedCommand(name)
