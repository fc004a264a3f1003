"""Domain-level models used by services and stores.

A `Game` is the unit of persistence: one document per game, keyed for
lookup by team, channel and state. Instances are frozen; transitions
build a new `Game` with `dataclasses.replace` rather than mutating the
loaded one.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from services.board import Board, Mark
from services.win_checker import WinLine
from utils.time import parse_iso, to_iso


class GameState(str, Enum):
	STARTED = "STARTED"
	WIN = "WIN"
	TIE = "TIE"
	NORESULT = "NORESULT"

	@property
	def is_terminal(self) -> bool:
		return self is not GameState.STARTED


@dataclass(frozen=True)
class Player:
	# Display name; unique within a team, so it is what players are compared by.
	name: str
	id: Optional[str] = None

	def to_dict(self) -> dict[str, Any]:
		return {"id": self.id, "name": self.name}

	@classmethod
	def from_dict(cls, data: dict[str, Any]) -> "Player":
		return cls(name=data["name"], id=data.get("id"))


@dataclass(frozen=True)
class HistoryEntry:
	player: str
	move: int
	time: datetime

	def to_dict(self) -> dict[str, Any]:
		return {"player": self.player, "move": self.move, "time": to_iso(self.time)}

	@classmethod
	def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
		return cls(player=data["player"], move=int(data["move"]), time=parse_iso(data["time"]))


@dataclass(frozen=True)
class Game:
	team_id: str
	channel_id: str
	players: tuple[Player, Player]
	current_player: str
	board: Board
	state: GameState = GameState.STARTED
	start_player: Optional[str] = None
	winner: Optional[str] = None
	history: tuple[HistoryEntry, ...] = ()
	id: Optional[int] = None
	created_at: Optional[datetime] = None
	updated_at: Optional[datetime] = None
	# Set when the game ended on a completed line, for redrawing the final board.
	win_line: Optional[WinLine] = None

	def __post_init__(self):
		if len(self.players) != 2:
			raise ValueError(f"A game needs exactly two players, got {len(self.players)}")
		if self.players[0].name == self.players[1].name:
			raise ValueError("Players must be distinct")
		if self.current_player not in self.player_names:
			raise ValueError(f"current_player {self.current_player!r} is not one of {self.player_names}")
		if self.winner is not None and self.winner not in self.player_names:
			raise ValueError(f"winner {self.winner!r} is not one of {self.player_names}")
		if (self.winner is not None) != (self.state is GameState.WIN):
			raise ValueError("winner must be set exactly when the game state is WIN")

	@classmethod
	def new(
		cls,
		team_id: str,
		channel_id: str,
		first: Player,
		second: Player,
		*,
		challenger: Optional[str] = None,
		size: int = 3,
	) -> "Game":
		"""A fresh STARTED game; `first` plays X and moves first."""
		return cls(
			team_id=team_id,
			channel_id=channel_id,
			players=(first, second),
			current_player=first.name,
			board=Board.empty(size),
			state=GameState.STARTED,
			start_player=challenger,
		)

	@property
	def player_names(self) -> tuple[str, str]:
		return (self.players[0].name, self.players[1].name)

	@property
	def turn_index(self) -> int:
		return self.player_names.index(self.current_player)

	@property
	def current(self) -> Player:
		return self.players[self.turn_index]

	def is_player(self, name: str) -> bool:
		return name in self.player_names

	def player(self, name: str) -> Player:
		return self.players[self.player_names.index(name)]

	def other_player(self, name: str) -> Player:
		return self.players[1 - self.player_names.index(name)]

	def mark_of(self, name: str) -> Mark:
		return Mark.X if self.player_names.index(name) == 0 else Mark.O

	def evolve(self, **changes) -> "Game":
		return replace(self, **changes)

	# -------------------------------------------------
	# Document mapping
	# -------------------------------------------------

	def to_document(self) -> dict[str, Any]:
		return {
			"teamId": self.team_id,
			"channelId": self.channel_id,
			"startPlayer": self.start_player,
			"players": [p.to_dict() for p in self.players],
			"currentPlayer": self.current_player,
			"winner": self.winner,
			"board": self.board.to_list(),
			"state": self.state.value,
			"history": [h.to_dict() for h in self.history],
			"winLine": self.win_line.to_dict() if self.win_line else None,
		}

	@classmethod
	def from_document(
		cls,
		doc: dict[str, Any],
		*,
		id: Optional[int] = None,
		created_at: Optional[datetime] = None,
		updated_at: Optional[datetime] = None,
	) -> "Game":
		p0, p1 = (Player.from_dict(p) for p in doc["players"])
		return cls(
			team_id=doc["teamId"],
			channel_id=doc["channelId"],
			players=(p0, p1),
			current_player=doc["currentPlayer"],
			board=Board(doc["board"]),
			state=GameState(doc["state"]),
			start_player=doc.get("startPlayer"),
			winner=doc.get("winner"),
			history=tuple(HistoryEntry.from_dict(h) for h in doc.get("history", [])),
			id=id,
			created_at=created_at,
			updated_at=updated_at,
			win_line=WinLine.from_dict(doc["winLine"]) if doc.get("winLine") else None,
		)


__all__ = ["GameState", "Player", "HistoryEntry", "Game"]
