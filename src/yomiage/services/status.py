"""Per-guild voice session status.

Reading a message compares it with the previous message read in the same
guild and then records it, so each guild's status is only touched under
that guild's lock.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from yomiage.services.speech_queue import SpeechQueue

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from yomiage.models.schemas import ChatMessage


@dataclass
class GuildStatus:
    """Voice session state of one guild."""

    bound_text_channel: int
    speech_queue: SpeechQueue = field(default_factory=SpeechQueue)
    last_message_read: ChatMessage | None = None


class VoiceConnectionStatusMap:
    """Guild statuses, each guarded by its own lock.

    A guild's lock lives only while the guild has a status or someone is
    using the lock.
    """

    def __init__(self, queue_max_size: int = 100) -> None:
        self._queue_max_size = queue_max_size
        self._statuses: dict[int, GuildStatus] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_users: dict[int, int] = {}

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._statuses

    @asynccontextmanager
    async def _exclusive(self, guild_id: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(guild_id, asyncio.Lock())
        self._lock_users[guild_id] = self._lock_users.get(guild_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[guild_id] -= 1
            if self._lock_users[guild_id] == 0 and guild_id not in self._statuses:
                del self._lock_users[guild_id]
                del self._locks[guild_id]

    async def open(self, guild_id: int, bound_text_channel: int) -> GuildStatus:
        """Start tracking a guild with a fresh speech queue (on voice join)."""
        status = GuildStatus(
            bound_text_channel=bound_text_channel,
            speech_queue=SpeechQueue(max_size=self._queue_max_size),
        )
        await self.insert(guild_id, status)
        return status

    async def insert(self, guild_id: int, status: GuildStatus) -> None:
        """Start tracking a guild with the given status."""
        async with self._exclusive(guild_id):
            self._statuses[guild_id] = status

    async def remove(self, guild_id: int) -> GuildStatus | None:
        """Stop tracking a guild (on voice leave) and close its queue."""
        async with self._exclusive(guild_id):
            status = self._statuses.pop(guild_id, None)
        if status is not None:
            status.speech_queue.close()
        return status

    @asynccontextmanager
    async def get_mut(self, guild_id: int) -> AsyncIterator[GuildStatus | None]:
        """Hold the guild's status exclusively for the duration of the block.

        Yields None if the guild has no active session.
        """
        async with self._exclusive(guild_id):
            yield self._statuses.get(guild_id)
