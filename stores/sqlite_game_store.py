import json
from enum import Enum
from typing import Any, Optional
import logging
import sqlite3

import aiosqlite

from db import ensure_db
from models.domain_models import Game
from utils.time import now_utc, parse_iso, to_iso
from .exceptions import (
    StoreError,
    GameAlreadyExists,
    DocumentNotFound,
    UnexpectedResult,
)
from .game_store import GameStore

logger = logging.getLogger(__name__)


class SqliteGameStore(GameStore):
    """SQLite-based implementation of GameStore.

    Each game is one row: the indexed lookup columns (team_id, channel_id,
    state) plus the full JSON document. A partial unique index on
    (team_id, channel_id) WHERE state = 'STARTED' rejects a second active
    game in the same channel even if two inserts race.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.db: aiosqlite.Connection = None
        logger.info(f"[STORE] SqliteGameStore initialized with db_path: {db_path}")

    async def init(self):
        """Initialize database connection. Call this after construction."""
        await ensure_db(self.db_path)
        self.db = await aiosqlite.connect(
            self.db_path,
            check_same_thread=False,
            timeout=30.0,
            isolation_level=None  # autocommit; every store call is a single statement
        )
        await self.db.execute("PRAGMA journal_mode=DELETE")
        self.db.row_factory = aiosqlite.Row
        logger.info(f"[STORE] Database connection established to {self.db_path}")

        # Verify tables exist
        async with self.db.execute("SELECT name FROM sqlite_master WHERE type='table'") as cursor:
            tables = [t[0] for t in await cursor.fetchall()]
            if "games" not in tables:
                logger.error(f"[STORE] ✗ No games table found! Database may be empty or corrupted")
                raise RuntimeError(f"Database at {self.db_path} has no games table - initialization may have failed")

    async def close(self):
        """Close database connection."""
        if self.db:
            await self.db.close()
            self.db = None

    # -------------------------------------------------
    # Documents
    # -------------------------------------------------

    async def lookup(self, criteria: dict[str, Any]) -> Optional[Game]:
        # Raises: ValueError, StoreError
        self.check_criteria(criteria)
        clauses = []
        params = []
        for key in self.LOOKUP_KEYS:
            if key in criteria:
                clauses.append(f"{key} = ?")
                params.append(_column_value(criteria[key]))
        where = " AND ".join(clauses) if clauses else "1 = 1"

        try:
            cur = await self.db.execute(
                f"""
                SELECT id, document, created_at, updated_at FROM games
                WHERE {where}
                ORDER BY id DESC LIMIT 1
                """,
                tuple(params),
            )
            row = await cur.fetchone()
        except sqlite3.Error as exc:
            logger.error(f"[STORE] Lookup failed for {criteria}: {exc}")
            raise StoreError(f"Lookup failed: {exc}") from exc

        if row is None:
            return None
        return _row_to_game(row)

    async def insert(self, game: Game) -> Game:
        # Raises: GameAlreadyExists, StoreError
        if game.id is not None:
            raise UnexpectedResult(f"Game {game.id} has already been inserted")

        now = now_utc()
        logger.info(f"[STORE] Inserting game for {game.team_id}/{game.channel_id}")
        try:
            cur = await self.db.execute(
                """
                INSERT INTO games (team_id, channel_id, state, document, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    game.team_id,
                    game.channel_id,
                    game.state.value,
                    json.dumps(game.to_document()),
                    to_iso(now),
                    to_iso(now),
                ),
            )
        except sqlite3.IntegrityError as exc:
            raise GameAlreadyExists(
                f"A STARTED game already exists in {game.team_id}/{game.channel_id}"
            ) from exc
        except sqlite3.Error as exc:
            logger.error(f"[STORE] Insert failed for {game.team_id}/{game.channel_id}: {exc}")
            raise StoreError(f"Insert failed: {exc}") from exc

        return game.evolve(id=cur.lastrowid, created_at=now, updated_at=now)

    async def update(self, game: Game) -> Game:
        # Raises: DocumentNotFound, StoreError
        if game.id is None:
            raise DocumentNotFound("Cannot update a game that was never inserted")

        now = now_utc()
        try:
            cur = await self.db.execute(
                """
                UPDATE games SET state = ?, document = ?, updated_at = ?
                WHERE id = ?
                """,
                (game.state.value, json.dumps(game.to_document()), to_iso(now), game.id),
            )
        except sqlite3.IntegrityError as exc:
            # only reachable by reviving a finished game while another is active
            raise UnexpectedResult(f"Integrity error updating game {game.id}") from exc
        except sqlite3.Error as exc:
            logger.error(f"[STORE] Update failed for game {game.id}: {exc}")
            raise StoreError(f"Update failed: {exc}") from exc

        if cur.rowcount == 0:
            raise DocumentNotFound(f"Game {game.id} not found")
        return game.evolve(updated_at=now)


def _column_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _row_to_game(row) -> Game:
    return Game.from_document(
        json.loads(row["document"]),
        id=row["id"],
        created_at=parse_iso(row["created_at"]),
        updated_at=parse_iso(row["updated_at"]),
    )
