import asyncio
from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from models.domain_models import Game, GameState, Player
from services.admission import AdmissionGuard
from services.game_service import TicTacToeService
from stores import GameAlreadyExists, DocumentNotFound, GameStore

TEAM = "T001"
CHANNEL = "C001"

ALICE = Player(name="alice", id="U001")
BOB = Player(name="bob", id="U002")
CAROL = Player(name="carol", id="U003")

FIXED_NOW = datetime(2016, 10, 4, 18, 2, 11, tzinfo=timezone.utc)


class InMemoryGameStore(GameStore):
    """Dict-backed store that enforces one STARTED game per channel."""

    def __init__(self):
        self.rows: dict[int, Game] = {}
        self._next_id = 1

    async def lookup(self, criteria: dict[str, Any]) -> Optional[Game]:
        self.check_criteria(criteria)
        for game in sorted(self.rows.values(), key=lambda g: g.id, reverse=True):
            if all(getattr(game, k) == v for k, v in criteria.items()):
                return game
        return None

    async def insert(self, game: Game) -> Game:
        # yield so concurrent starts interleave the way they would on a real store
        await asyncio.sleep(0)
        for other in self.rows.values():
            if (
                other.state is GameState.STARTED
                and game.state is GameState.STARTED
                and (other.team_id, other.channel_id) == (game.team_id, game.channel_id)
            ):
                raise GameAlreadyExists(f"{game.team_id}/{game.channel_id}")
        saved = game.evolve(id=self._next_id, created_at=FIXED_NOW, updated_at=FIXED_NOW)
        self.rows[saved.id] = saved
        self._next_id += 1
        return saved

    async def update(self, game: Game) -> Game:
        if game.id not in self.rows:
            raise DocumentNotFound(f"Game {game.id} not found")
        self.rows[game.id] = game
        return game

    def started(self, team_id: str = TEAM, channel_id: str = CHANNEL) -> list[Game]:
        return [
            g for g in self.rows.values()
            if g.state is GameState.STARTED and (g.team_id, g.channel_id) == (team_id, channel_id)
        ]


class StaticResolver:
    """Membership resolver backed by a fixed channel roster."""

    def __init__(self, members: dict[str, list[Player]]):
        self.members = members
        self.calls: list[tuple[str, str]] = []

    async def resolve_member(self, user_name: str, channel_id: str) -> Optional[Player]:
        self.calls.append((user_name, channel_id))
        await asyncio.sleep(0)
        for player in self.members.get(channel_id, []):
            if player.name == user_name:
                return player
        return None


class FixedRandom:
    """Stands in for random.Random; `randint` always returns `value`."""

    def __init__(self, value: int):
        self.value = value

    def randint(self, a: int, b: int) -> int:
        assert a <= self.value <= b
        return self.value


@pytest.fixture
def store():
    return InMemoryGameStore()


@pytest.fixture
def resolver():
    return StaticResolver({CHANNEL: [ALICE, BOB, CAROL]})


@pytest.fixture
def service(store, resolver):
    # randint 1 puts the challenger first
    return TicTacToeService(
        store,
        resolver,
        guard=AdmissionGuard(),
        rng=FixedRandom(1),
        clock=lambda: FIXED_NOW,
    )
