"""Turn a `CommandResult` into the JSON body Slack expects back.

Failures and read-only views are ephemeral (only the caller sees them);
game-changing outcomes are posted in the channel.
"""
from __future__ import annotations

from typing import Optional

from models.api_models import SlackAttachment, SlackResponse
from models.domain_models import Game, Player
from utils.time import to_utc_string
from .command_parser import CommandName, HelpReason
from .dispatcher import CommandResult
from .drawer import draw
from .exceptions import (
    AlreadyPlaying,
    CreationInProgress,
    GameNotFound,
    InvalidMove,
    InvalidOpponent,
    MembershipLookupFailed,
    NotAPlayer,
    NotYourTurn,
    SelfChallenge,
)
from .game_service import EndOutcome, GameView, PlayOutcome, PlayResult, StartOutcome
from .messages import get_locale

GOOD = "#36a64f"
DANGER = "#ff0000"
WARNING = "#ff9900"

EPHEMERAL = "ephemeral"
IN_CHANNEL = "in_channel"

CHANNEL_ERRORS = {"channel_not_found", "not_in_channel", "is_archived"}


def user_display(player: Player) -> str:
    if player.id:
        return f"<@{player.id}|{player.name}>"
    return f"@{player.name}"


class SlackFormatter:

    def __init__(self, locale: str = "US_EN", command: str = "ttt"):
        self.locale = get_locale(locale)
        self.command = command

    def labels(self, name: CommandName) -> dict:
        return {k: v.replace("{command}", self.command) for k, v in self.locale[name].items()}

    def _attachment(self, text: str, color: str, title: Optional[str] = None) -> SlackAttachment:
        return SlackAttachment(text=text, color=color, title=title)

    def _usage(self, color: str) -> SlackAttachment:
        labels = self.labels(CommandName.HELP)
        return self._attachment(labels["USAGE"], color, labels["USAGE_TITLE"])

    def format(self, result: CommandResult) -> SlackResponse:
        if result.command.is_help:
            return self.help(result.command.help_reason)
        if not result.ok:
            return self.failure(result)

        outcome = result.outcome
        if isinstance(outcome, StartOutcome):
            return self.started(outcome)
        if isinstance(outcome, PlayOutcome):
            return self.played(outcome)
        if isinstance(outcome, GameView) and result.command.name is CommandName.HISTORY:
            return self.history(outcome)
        if isinstance(outcome, GameView):
            return self.status(outcome)
        if isinstance(outcome, EndOutcome):
            return self.ended(outcome)
        raise TypeError(f"Unexpected outcome {outcome!r}")

    # -------------------------------------------------
    # Help
    # -------------------------------------------------

    def help(self, reason: Optional[HelpReason]) -> SlackResponse:
        labels = self.labels(CommandName.HELP)
        if reason is HelpReason.UNKNOWN_COMMAND:
            text, color = labels["INVALID_COMMAND"], DANGER
        elif reason is HelpReason.SELF_CHALLENGE:
            text, color = self.labels(CommandName.START)["SAME_USER_ERROR"], DANGER
        elif reason is HelpReason.BAD_MOVE:
            text, color = self.labels(CommandName.PLAY)["MOVE_ERROR"], DANGER
        else:
            text, color = labels["CMD_TEXT"], WARNING
        return SlackResponse(text=text, response_type=EPHEMERAL, attachments=[self._usage(color)])

    # -------------------------------------------------
    # Failures
    # -------------------------------------------------

    def failure(self, result: CommandResult) -> SlackResponse:
        name = result.command.name
        labels = self.labels(name)
        error = result.error

        def reply(text: str, detail: Optional[str] = None) -> SlackResponse:
            attachments = [self._attachment(detail, DANGER)] if detail else []
            return SlackResponse(text=text, response_type=EPHEMERAL, attachments=attachments)

        if isinstance(error, GameNotFound):
            return reply(labels["GAME_NOT_FOUND_ERROR"])
        if isinstance(error, MembershipLookupFailed) and error.code in CHANNEL_ERRORS:
            return reply(labels["CHANNEL_ERROR"], labels["CHANNEL_DETAIL_ERROR"])
        if isinstance(error, InvalidOpponent):
            return reply(labels["USER_ERROR"], labels["USER_DETAIL_ERROR"].format(
                user=error.user_name,
                channel_id=error.channel_id,
                channel_name=result.context.channel_name,
            ))
        if isinstance(error, SelfChallenge):
            return reply(labels["SAME_USER_ERROR"])
        if isinstance(error, AlreadyPlaying):
            return reply(labels["USER_ERROR"], labels["GAME_START_ERROR"])
        if isinstance(error, CreationInProgress):
            return reply(labels["USER_ERROR"], labels["GAME_SYNC_ERROR"])
        if isinstance(error, NotAPlayer):
            first, second = (user_display(p) for p in error.players)
            if name is CommandName.END:
                return reply(labels["CMD_ERROR"], labels["CMD_DETAIL_ERROR"].format(first=first, second=second))
            return reply(labels["USER_ERROR"], labels["USER_DETAIL_ERROR"].format(first=first, second=second))
        if isinstance(error, NotYourTurn):
            return reply(labels["USER_ERROR"], labels["TURN_ERROR"].format(player=user_display(error.expected)))
        if isinstance(error, InvalidMove):
            return reply(labels["CMD_ERROR"], labels["CMD_DETAIL_ERROR"])
        return reply(labels["DB_ERROR"])

    # -------------------------------------------------
    # Outcomes
    # -------------------------------------------------

    def started(self, outcome: StartOutcome) -> SlackResponse:
        labels = self.labels(CommandName.START)
        game = outcome.game
        x, o = (user_display(p) for p in game.players)
        detail = (
            labels["CMD_DETAIL_TEXT"].format(
                challenger=user_display(outcome.challenger),
                challenged=user_display(outcome.challenged),
            )
            + f"\n`X` -> {x}\n`O` -> {o}\nFirst move by: {x}\n"
            + draw(game.board)
        )
        return SlackResponse(text=labels["CMD_TEXT"], attachments=[self._attachment(detail, GOOD)])

    def played(self, outcome: PlayOutcome) -> SlackResponse:
        labels = self.labels(CommandName.PLAY)
        board = outcome.game.board
        if outcome.result is PlayResult.WIN:
            text = labels["WIN_TEXT"].format(player=user_display(outcome.mover))
            picture = draw(board, outcome.win_line)
        elif outcome.result is PlayResult.TIE:
            text = labels["TIE_TEXT"]
            picture = draw(board)
        else:
            text = labels["NEXT_TURN_TEXT"].format(
                player=user_display(outcome.mover),
                next_player=user_display(outcome.next_player),
            )
            picture = draw(board)
        return SlackResponse(text=text, attachments=[self._attachment(picture, GOOD)])

    def status(self, view: GameView) -> SlackResponse:
        labels = self.labels(CommandName.STATUS)
        first, second = (user_display(p) for p in view.game.players)
        status = labels["CMD_STATUS_TEXT"].format(first=first, second=second, player=user_display(view.turn))
        return SlackResponse(
            text=labels["CMD_TEXT"],
            response_type=EPHEMERAL,
            attachments=[self._attachment(status + "\n" + draw(view.board), GOOD)],
        )

    def history_lines(self, game: Game) -> str:
        labels = self.labels(CommandName.HISTORY)
        if not game.history:
            return labels["HISTORY_NOT_FOUND_ERROR"]
        lines = [
            labels["HISTORY_LINE"].format(
                number=number,
                player=user_display(game.player(entry.player)),
                symbol=game.mark_of(entry.player).symbol,
                move=entry.move,
                time=to_utc_string(entry.time),
            )
            for number, entry in enumerate(game.history, start=1)
        ]
        return "\n".join(lines) + "\n"

    def history(self, view: GameView) -> SlackResponse:
        labels = self.labels(CommandName.HISTORY)
        first, second = (user_display(p) for p in view.game.players)
        body = (
            self.history_lines(view.game)
            + "\n"
            + labels["CMD_STATUS_TURN_TEXT"].format(player=user_display(view.turn))
            + "\n"
            + draw(view.board)
        )
        return SlackResponse(
            text=labels["CMD_STATUS_TEXT"].format(first=first, second=second),
            response_type=EPHEMERAL,
            attachments=[self._attachment(body, GOOD)],
        )

    def ended(self, outcome: EndOutcome) -> SlackResponse:
        labels = self.labels(CommandName.END)
        first, second = (user_display(p) for p in outcome.game.players)
        return SlackResponse(text=labels["CMD_SUCCESS"].format(first=first, second=second))
