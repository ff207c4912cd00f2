"""Yomiage - Wiring of the reading pipeline.

Builds the Redis client, dictionary store, normalizer and message handler
from settings, the way the bot's startup code needs them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from yomiage import __version__
from yomiage.config import Settings, get_settings
from yomiage.logging_setup import setup_logging
from yomiage.services.dictionary import DictionaryStore
from yomiage.services.message_handler import MessageHandler
from yomiage.services.reading.normalizer import TextNormalizer
from yomiage.services.status import VoiceConnectionStatusMap

if TYPE_CHECKING:
    import redis.asyncio as redis

    from yomiage.services.message_handler import VoiceClient
    from yomiage.services.reading.normalizer import NameResolver


@dataclass
class ReadingApp:
    """Services making up the reading pipeline."""

    redis_client: redis.Redis
    dictionary: DictionaryStore
    statuses: VoiceConnectionStatusMap
    normalizer: TextNormalizer
    handler: MessageHandler

    async def close(self) -> None:
        """Release the Redis connection pool."""
        await self.redis_client.aclose()


async def create_app(
    bot_user_id: int,
    voice_client: VoiceClient,
    name_resolver: NameResolver | None = None,
    settings: Settings | None = None,
    redis_client: redis.Redis | None = None,
) -> ReadingApp:
    """Build the reading pipeline.

    Args:
        bot_user_id: Our own user id; its messages are never read
        voice_client: Voice gateway used to check connection state
        name_resolver: Author name lookup (nickname with account name fallback)
        settings: Settings to use. Defaults to environment configuration.
        redis_client: Existing Redis client. Connects using settings if None.

    Returns:
        The wired services
    """
    settings = settings or get_settings()
    setup_logging(settings)
    logger = structlog.get_logger()

    logger.info("Starting Yomiage", version=__version__, env=settings.env)

    if redis_client is None:
        import redis.asyncio as redis

        redis_client = redis.from_url(settings.redis.url, decode_responses=True)
        await redis_client.ping()
        logger.info("Redis connected", url=settings.redis.url)

    dictionary = DictionaryStore(redis_client)
    statuses = VoiceConnectionStatusMap(settings.reading.queue_max_size)
    normalizer = TextNormalizer(dictionary, name_resolver, settings.reading)
    handler = MessageHandler(bot_user_id, voice_client, statuses, normalizer)

    return ReadingApp(
        redis_client=redis_client,
        dictionary=dictionary,
        statuses=statuses,
        normalizer=normalizer,
        handler=handler,
    )
