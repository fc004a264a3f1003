"""
Admission guard for game creation.

`start` checks that a channel has no active game and then inserts one.
Between those two steps a second `start` in the same channel could pass
the same check. The guard marks the channel as "being created" while the
insert is in flight; a second `start` that reaches the guard in that window
fails with CreationInProgress instead of racing the insert.

This is per-process only. Several server processes behind one slash
command can still race each other; the store's unique index on active
games is what stops a duplicate row in that case.
"""
from contextlib import asynccontextmanager
import logging

from .exceptions import CreationInProgress

logger = logging.getLogger(__name__)


class AdmissionGuard:

    def __init__(self):
        # (team_id, channel_id) pairs with a game insert in flight
        self._pending: set[tuple[str, str]] = set()

    def is_busy(self, team_id: str, channel_id: str) -> bool:
        return (team_id, channel_id) in self._pending

    def acquire(self, team_id: str, channel_id: str) -> None:
        """Mark the channel as busy.

        Raises:
            CreationInProgress: if the channel is already marked.
        """
        key = (team_id, channel_id)
        if key in self._pending:
            logger.info(f"[GAME] Rejected concurrent start in {team_id}/{channel_id}")
            raise CreationInProgress(team_id, channel_id)
        self._pending.add(key)

    def release(self, team_id: str, channel_id: str) -> None:
        self._pending.discard((team_id, channel_id))

    @asynccontextmanager
    async def admit(self, team_id: str, channel_id: str):
        """Hold the channel for the duration of the block.

        Marking happens synchronously on entry, with no await between the
        membership test and the add, so it is atomic on the event loop.
        """
        self.acquire(team_id, channel_id)
        try:
            yield
        finally:
            self.release(team_id, channel_id)
