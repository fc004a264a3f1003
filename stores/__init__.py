# Abstractions
from .game_store import GameStore

# Exceptions
from .exceptions import (
    StoreError,
    GameAlreadyExists,
    DocumentNotFound,
    UnexpectedResult,
)

# Concrete implementations are private; only abstract interfaces are exported.
from .sqlite_game_store import SqliteGameStore as _SqliteGameStore

__all__ = [
    # Abstractions
    "GameStore",
    # Exceptions
    "StoreError",
    "GameAlreadyExists",
    "DocumentNotFound",
    "UnexpectedResult",
    # Runtime helpers
    "init_stores",
    "close_stores",
]


# Runtime singletons and initialization helpers
from typing import Optional

game_store: Optional[GameStore] = None


async def init_stores(db_path: str) -> GameStore:
    """Initialize the module-level game store for this process.

    Safe to call multiple times; initialization is idempotent.
    """
    global game_store

    if game_store is None:
        store = _SqliteGameStore(db_path)
        await store.init()
        game_store = store
    return game_store


async def close_stores() -> None:
    global game_store
    if game_store is not None:
        await game_store.close()
        game_store = None
