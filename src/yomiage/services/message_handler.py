"""Message Handler - Feeds chat messages of the bound channel to the speech queue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from yomiage.errors import YomiageError

if TYPE_CHECKING:
    from yomiage.models.schemas import ChatMessage
    from yomiage.services.reading.normalizer import TextNormalizer
    from yomiage.services.status import VoiceConnectionStatusMap

logger = logging.getLogger(__name__)


class VoiceClient(Protocol):
    """Voice gateway, as far as reading is concerned."""

    async def is_connected(self, guild_id: int) -> bool:
        ...


class MessageHandler:
    """Decides whether a message is read aloud and queues its text."""

    def __init__(
        self,
        bot_user_id: int,
        voice_client: VoiceClient,
        status_map: VoiceConnectionStatusMap,
        normalizer: TextNormalizer,
    ) -> None:
        self._bot_user_id = bot_user_id
        self._voice = voice_client
        self._statuses = status_map
        self._normalizer = normalizer

    async def handle(self, message: ChatMessage) -> str | None:
        """Read a message aloud if it qualifies.

        Args:
            message: The incoming chat message

        Returns:
            The queued text, or None if the message was skipped

        Raises:
            TransportError: If Redis or a name lookup failed
            ProtocolInvariantViolation: If Redis broke its documented contract
            QueueError: If the speech queue rejected the text
        """
        guild_id = message.guild_id
        if guild_id is None:
            return None

        if not await self._voice.is_connected(guild_id):
            return None

        async with self._statuses.get_mut(guild_id) as status:
            if status is None:
                return None

            # Skip our own messages
            if message.author.id == self._bot_user_id:
                return None

            ignore_prefix = self._normalizer.settings.ignore_prefix
            if ignore_prefix and message.content.startswith(ignore_prefix):
                return None

            if status.bound_text_channel != message.channel_id:
                return None

            text = await self._normalizer.build_read_text(message, status.last_message_read)

            logger.debug("Queue reading %r", text)
            status.speech_queue.push(text)

            status.last_message_read = message
            return text

    async def handle_safely(self, message: ChatMessage) -> str | None:
        """Like ``handle``, but a failure only drops this message."""
        try:
            return await self.handle(message)
        except YomiageError as e:
            logger.warning(
                "Message %s in guild %s not read aloud: %s", message.id, message.guild_id, e
            )
            return None
