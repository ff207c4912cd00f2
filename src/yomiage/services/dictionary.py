"""Dictionary Store - Per-guild pronunciation dictionaries in Redis.

Each guild owns one Redis hash, ``guild:<guild_id>:dict``, mapping a word
to its reading. Every operation is a single Redis command, so atomicity
comes from Redis itself:

- ``insert`` uses HSETNX and never overwrites an existing word
- ``remove`` uses HDEL
- ``get_all`` uses HGETALL; a guild without a dictionary yields ``{}``
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from redis.exceptions import RedisError

from yomiage.errors import ProtocolInvariantViolation, TransportError
from yomiage.models.schemas import DictionaryEntry, InsertResponse, RemoveResponse

if TYPE_CHECKING:
    import redis.asyncio as redis

logger = logging.getLogger(__name__)


def dict_key(guild_id: int | str) -> str:
    """Redis key of a guild's dictionary hash."""
    return f"guild:{guild_id}:dict"


def _decode(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode()
    return value


class DictionaryStore:
    """Stateless accessor for guild dictionaries.

    Holds no dictionary data itself; every call is one Redis round-trip.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the store.

        Args:
            redis_client: Async Redis client, with or without decode_responses.
        """
        self._redis = redis_client

    async def insert(self, guild_id: int | str, word: str, reading: str) -> InsertResponse:
        """Add a word to the guild dictionary unless it is already registered.

        Args:
            guild_id: Guild identifier
            word: Text to match
            reading: Text spoken in place of the word

        Returns:
            SUCCESS if the word was added, WORD_ALREADY_EXISTS otherwise

        Raises:
            TransportError: If Redis could not be reached
            ProtocolInvariantViolation: If HSETNX answered something other than 0 or 1
        """
        key = dict_key(guild_id)
        try:
            resp = await self._redis.hsetnx(key, word, reading)
        except (RedisError, OSError) as e:
            raise TransportError(f"HSETNX {key} failed: {e}") from e

        if resp == 0:
            return InsertResponse.WORD_ALREADY_EXISTS
        if resp == 1:
            logger.info("Added dictionary word for guild %s: %s -> %s", guild_id, word, reading)
            return InsertResponse.SUCCESS

        logger.error("Unexpected HSETNX response for %s: %r", key, resp)
        raise ProtocolInvariantViolation("HSETNX", resp)

    async def remove(self, guild_id: int | str, word: str) -> RemoveResponse:
        """Remove a word from the guild dictionary.

        Returns:
            SUCCESS if the word was removed, WORD_DOES_NOT_EXIST otherwise

        Raises:
            TransportError: If Redis could not be reached
            ProtocolInvariantViolation: If HDEL answered something other than 0 or 1
        """
        key = dict_key(guild_id)
        try:
            resp = await self._redis.hdel(key, word)
        except (RedisError, OSError) as e:
            raise TransportError(f"HDEL {key} failed: {e}") from e

        if resp == 0:
            return RemoveResponse.WORD_DOES_NOT_EXIST
        if resp == 1:
            logger.info("Removed dictionary word for guild %s: %s", guild_id, word)
            return RemoveResponse.SUCCESS

        logger.error("Unexpected HDEL response for %s: %r", key, resp)
        raise ProtocolInvariantViolation("HDEL", resp)

    async def get_all(self, guild_id: int | str) -> dict[str, str]:
        """Get the whole guild dictionary.

        Returns:
            Mapping of word to reading, empty when the guild has no dictionary

        Raises:
            TransportError: If Redis could not be reached
        """
        key = dict_key(guild_id)
        try:
            resp = await self._redis.hgetall(key)
        except (RedisError, OSError) as e:
            raise TransportError(f"HGETALL {key} failed: {e}") from e

        return {_decode(word): _decode(reading) for word, reading in resp.items()}

    async def list_entries(self, guild_id: int | str) -> list[DictionaryEntry]:
        """Get the guild dictionary as entries sorted by word."""
        dictionary = await self.get_all(guild_id)
        return [
            DictionaryEntry(guild_id=str(guild_id), word=word, reading=reading)
            for word, reading in sorted(dictionary.items())
        ]
