from typing import Any, Optional
from abc import ABC, abstractmethod

from models.domain_models import Game


# =========================
# GameStore Interface
# =========================

class GameStore(ABC):
    """
    Document store for game records.

    Invariants:
    - At most one STARTED game exists per (team_id, channel_id)
    - Each call is a single atomic operation; there are no multi-call transactions
    - Terminal games are kept, never deleted; lookups filter them out by state
    """

    LOOKUP_KEYS = ("team_id", "channel_id", "state")

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------

    async def init(self) -> None:
        """Open connections. Call this after construction."""

    async def close(self) -> None:
        """Release connections."""

    # -------------------------------------------------
    # Documents
    # -------------------------------------------------

    @abstractmethod
    async def lookup(self, criteria: dict[str, Any]) -> Optional[Game]:
        """Return the most recent game matching every key in `criteria`, or None.

        Supported keys: team_id, channel_id, state.

        Raises:
            ValueError: If criteria contains an unsupported key.
        """

    @abstractmethod
    async def insert(self, game: Game) -> Game:
        """Persist a new game and return it with id and timestamps assigned.

        Raises:
            GameAlreadyExists: If a STARTED game already exists for the same
                team and channel.
        """

    @abstractmethod
    async def update(self, game: Game) -> Game:
        """Overwrite the stored record with the same id and return the saved copy.

        Raises:
            DocumentNotFound: If no record with `game.id` exists.
        """

    @classmethod
    def check_criteria(cls, criteria: dict[str, Any]) -> None:
        unknown = set(criteria) - set(cls.LOOKUP_KEYS)
        if unknown:
            raise ValueError(f"Unsupported lookup keys: {sorted(unknown)}")
