"""
Boundary between the transport layer and the game service.

`dispatch` runs one parsed command and always returns a `CommandResult`:
either the command's outcome or the failure that stopped it. Business
failures (validation, not found, authorization, conflict) are expected
and logged at INFO; store and platform faults are logged as errors.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
import logging

from models.domain_models import Player
from stores import StoreError
from .command_parser import CommandName, ParsedCommand
from .exceptions import TicTacToeError
from .game_service import TicTacToeService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandContext:
    """Who sent the command and where."""
    team_id: str
    channel_id: str
    user_id: str
    user_name: str
    channel_name: str = ""

    @property
    def actor(self) -> Player:
        return Player(name=self.user_name, id=self.user_id)


@dataclass(frozen=True)
class CommandResult:
    command: ParsedCommand
    context: CommandContext
    outcome: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def dispatch(service: TicTacToeService, command: ParsedCommand, ctx: CommandContext) -> CommandResult:
    if command.is_help:
        return CommandResult(command, ctx)

    try:
        if command.name is CommandName.START:
            outcome = await service.start(ctx.team_id, ctx.channel_id, ctx.actor, command.opponent)
        elif command.name is CommandName.PLAY:
            outcome = await service.play(ctx.team_id, ctx.channel_id, ctx.user_name, command.index)
        elif command.name is CommandName.STATUS:
            outcome = await service.status(ctx.team_id, ctx.channel_id)
        elif command.name is CommandName.HISTORY:
            outcome = await service.history(ctx.team_id, ctx.channel_id)
        elif command.name is CommandName.END:
            outcome = await service.end(ctx.team_id, ctx.channel_id, ctx.user_name)
        else:
            raise ValueError(f"Unhandled command {command.name}")
    except (TicTacToeError, StoreError) as exc:
        if exc.category == "store":
            logger.error(
                f"[GAME] {command.name.value} failed in {ctx.team_id}/{ctx.channel_id}: "
                f"{exc.__class__.__name__}: {exc}",
                exc_info=True,
            )
        else:
            logger.info(f"[GAME] {command.name.value} rejected for {ctx.user_name}: {exc.__class__.__name__}: {exc}")
        return CommandResult(command, ctx, error=exc)

    return CommandResult(command, ctx, outcome=outcome)
