"""
Command state machine for channel tic-tac-toe.

Game-level transitions:

    (absent) --start--> STARTED --play--> STARTED | WIN | TIE
                        STARTED --end---> NORESULT

WIN, TIE and NORESULT are absorbing. Lookups only ever ask the store for
STARTED games, so a finished game is simply not found by later commands.

Each command is one load -> validate -> transform -> persist pass with a
single store read and at most one store write. The transform step for
`play` is `apply_move`, a pure function from the loaded game to the next
game plus a classified outcome.

Two concurrent `play` calls on the same game can both read the same
board and the later write wins. There is no version check on update;
the slash-command flow gives each player one request per turn, and the
turn check rejects the out-of-turn request in the normal case.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional
import logging
import random

from models.domain_models import Game, GameState, HistoryEntry, Player
from stores import GameAlreadyExists, GameStore
from utils.time import now_utc
from .admission import AdmissionGuard
from .board import DEFAULT_SIZE
from .exceptions import (
    AlreadyPlaying,
    GameNotFound,
    InvalidOpponent,
    NotAPlayer,
    NotYourTurn,
    SelfChallenge,
)
from .slack_client import MembershipResolver
from .win_checker import WinLine, check_win

logger = logging.getLogger(__name__)


class PlayResult(str, Enum):
    WIN = "WIN"
    TIE = "TIE"
    CONTINUE = "CONTINUE"


@dataclass(frozen=True)
class StartOutcome:
    game: Game
    challenger: Player
    challenged: Player

    @property
    def first_mover(self) -> Player:
        return self.game.players[0]


@dataclass(frozen=True)
class PlayOutcome:
    game: Game
    result: PlayResult
    mover: Player
    move: int
    win_line: Optional[WinLine] = None

    @property
    def next_player(self) -> Optional[Player]:
        """Whose turn it is now, or None once the game is over."""
        if self.result is PlayResult.CONTINUE:
            return self.game.current
        return None


@dataclass(frozen=True)
class GameView:
    """Read-only snapshot for `status` and `history`."""
    game: Game

    @property
    def turn(self) -> Player:
        return self.game.current

    @property
    def board(self):
        return self.game.board

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return self.game.history


@dataclass(frozen=True)
class EndOutcome:
    game: Game
    ended_by: Player


def _active_criteria(team_id: str, channel_id: str) -> dict:
    return {"team_id": team_id, "channel_id": channel_id, "state": GameState.STARTED}


def apply_move(game: Game, actor: str, index: int, now: datetime) -> tuple[Game, PlayOutcome]:
    """Compute the game that results from `actor` marking cell `index`.

    The input game is not modified.

    Raises:
        GameNotFound: if the game is already over.
        NotAPlayer: if actor is not one of the two players.
        NotYourTurn: if it is the other player's turn.
        InvalidMove: if index is out of range or the cell is taken.
    """
    if game.state is not GameState.STARTED:
        raise GameNotFound(game.team_id, game.channel_id)
    if not game.is_player(actor):
        raise NotAPlayer(actor, game.players)
    if actor != game.current_player:
        raise NotYourTurn(actor, game.current)

    board = game.board.place(index, game.mark_of(actor))
    history = game.history + (HistoryEntry(player=actor, move=index, time=now),)
    mover = game.player(actor)

    line = check_win(board, index)
    if line is not None:
        nxt = game.evolve(board=board, history=history, state=GameState.WIN, winner=actor, win_line=line)
        return nxt, PlayOutcome(nxt, PlayResult.WIN, mover, index, line)

    if board.is_full():
        nxt = game.evolve(board=board, history=history, state=GameState.TIE)
        return nxt, PlayOutcome(nxt, PlayResult.TIE, mover, index)

    nxt = game.evolve(
        board=board,
        history=history,
        current_player=game.other_player(actor).name,
    )
    return nxt, PlayOutcome(nxt, PlayResult.CONTINUE, mover, index)


class TicTacToeService:
    """Runs /ttt commands against a game store.

    Collaborators are injected: the store, the membership resolver used
    by `start`, the admission guard, a random source for picking the
    first mover, and a clock for history timestamps.
    """

    def __init__(
        self,
        store: GameStore,
        resolver: MembershipResolver,
        *,
        guard: Optional[AdmissionGuard] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = now_utc,
        board_size: int = DEFAULT_SIZE,
    ):
        self.store = store
        self.resolver = resolver
        self.guard = guard or AdmissionGuard()
        self.rng = rng or random.Random()
        self.clock = clock
        self.board_size = board_size

    async def _load_active(self, team_id: str, channel_id: str) -> Game:
        game = await self.store.lookup(_active_criteria(team_id, channel_id))
        if game is None:
            raise GameNotFound(team_id, channel_id)
        return game

    # -------------------------------------------------
    # Commands
    # -------------------------------------------------

    async def start(self, team_id: str, channel_id: str, challenger: Player, challenged: str) -> StartOutcome:
        """Start a game between `challenger` and the channel member named `challenged`.

        The first mover is picked at random and plays X.

        Raises:
            SelfChallenge: if both names are the same.
            InvalidOpponent: if `challenged` is not a member of the channel.
            AlreadyPlaying: if the channel already has an active game.
            CreationInProgress: if another start for this channel is mid-insert.
        """
        if challenger.name == challenged:
            raise SelfChallenge(f"{challenger.name} cannot challenge themselves")

        opponent = await self.resolver.resolve_member(challenged, channel_id)
        if opponent is None:
            raise InvalidOpponent(challenged, channel_id)

        if await self.store.lookup(_active_criteria(team_id, channel_id)) is not None:
            logger.info(f"[GAME] Game already started in {team_id}/{channel_id}")
            raise AlreadyPlaying(team_id, channel_id)

        async with self.guard.admit(team_id, channel_id):
            if self.rng.randint(1, 2) == 1:
                first, second = challenger, opponent
            else:
                first, second = opponent, challenger
            game = Game.new(
                team_id,
                channel_id,
                first,
                second,
                challenger=challenger.name,
                size=self.board_size,
            )
            try:
                game = await self.store.insert(game)
            except GameAlreadyExists as exc:
                raise AlreadyPlaying(team_id, channel_id) from exc

        logger.info(
            f"[GAME] {challenger.name} challenged {opponent.name} in {team_id}/{channel_id}; "
            f"{first.name} moves first"
        )
        return StartOutcome(game=game, challenger=challenger, challenged=opponent)

    async def play(self, team_id: str, channel_id: str, actor: str, index: int) -> PlayOutcome:
        """Place `actor`'s mark at `index` in the channel's active game.

        Raises:
            GameNotFound, NotAPlayer, NotYourTurn, InvalidMove
        """
        game = await self._load_active(team_id, channel_id)
        nxt, outcome = apply_move(game, actor, index, self.clock())
        saved = await self.store.update(nxt)
        logger.info(f"[GAME] {actor} played {index} in {team_id}/{channel_id}: {outcome.result.value}")
        return PlayOutcome(saved, outcome.result, outcome.mover, outcome.move, outcome.win_line)

    async def status(self, team_id: str, channel_id: str) -> GameView:
        """Raises: GameNotFound"""
        return GameView(await self._load_active(team_id, channel_id))

    async def history(self, team_id: str, channel_id: str) -> GameView:
        """Raises: GameNotFound"""
        return GameView(await self._load_active(team_id, channel_id))

    async def end(self, team_id: str, channel_id: str, actor: str) -> EndOutcome:
        """Abandon the active game without a result.

        Raises:
            GameNotFound, NotAPlayer
        """
        game = await self._load_active(team_id, channel_id)
        if not game.is_player(actor):
            raise NotAPlayer(actor, game.players)
        saved = await self.store.update(game.evolve(state=GameState.NORESULT))
        logger.info(f"[GAME] {actor} ended the game in {team_id}/{channel_id}")
        return EndOutcome(game=saved, ended_by=saved.player(actor))
