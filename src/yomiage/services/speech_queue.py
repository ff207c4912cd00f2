"""Bounded queue of texts waiting to be spoken in a guild."""

from __future__ import annotations

import asyncio
import logging

from yomiage.errors import QueueError

logger = logging.getLogger(__name__)


class SpeechQueue:
    """FIFO of normalized texts for one voice session.

    ``push`` never waits: a full or closed queue rejects the text.
    """

    def __init__(self, max_size: int = 100) -> None:
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return self._queue.qsize()

    def push(self, text: str) -> None:
        """Enqueue a text for speech.

        Raises:
            QueueError: If the queue is closed or full
        """
        if self._closed:
            raise QueueError("Speech queue is closed")
        try:
            self._queue.put_nowait(text)
        except asyncio.QueueFull as e:
            raise QueueError(f"Speech queue is full ({self._queue.maxsize} texts)") from e

    async def get(self) -> str:
        """Wait for the next text to speak."""
        return await self._queue.get()

    def clear(self) -> int:
        """Drop all pending texts. Returns how many were dropped."""
        dropped = 0
        while not self._queue.empty():
            self._queue.get_nowait()
            dropped += 1
        return dropped

    def close(self) -> None:
        """Reject further texts and drop pending ones."""
        self._closed = True
        dropped = self.clear()
        if dropped:
            logger.debug("Dropped %d pending texts on close", dropped)
