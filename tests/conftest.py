"""Shared fixtures for the reading pipeline tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from yomiage.config import ReadingSettings
from yomiage.models.schemas import Author, ChatMessage
from yomiage.services.dictionary import DictionaryStore
from yomiage.services.reading.normalizer import TextNormalizer

GUILD_ID = 1001
CHANNEL_ID = 2002
BOT_ID = 9999


class InMemoryRedis:
    """Test double for the Redis hash commands used by DictionaryStore."""

    def __init__(self, decode_responses: bool = True) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.decode_responses = decode_responses

    async def hsetnx(self, key: str, field: str, value: str) -> int:
        fields = self.hashes.setdefault(key, {})
        if field in fields:
            return 0
        fields[field] = value
        return 1

    async def hdel(self, key: str, *fields: str) -> int:
        existing = self.hashes.get(key, {})
        removed = 0
        for field in fields:
            if field in existing:
                del existing[field]
                removed += 1
        if key in self.hashes and not existing:
            del self.hashes[key]
        return removed

    async def hgetall(self, key: str) -> dict:
        fields = self.hashes.get(key, {})
        if self.decode_responses:
            return dict(fields)
        return {k.encode(): v.encode() for k, v in fields.items()}


def build_message(
    content: str,
    *,
    author_id: int = 1,
    name: str = "alice",
    nick: str | None = None,
    seconds: float = 0,
    message_id: int = 1,
    guild_id: int | None = GUILD_ID,
    channel_id: int = CHANNEL_ID,
    **kwargs,
) -> ChatMessage:
    """Build a chat message ``seconds`` after a fixed base time."""
    base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
    return ChatMessage(
        id=message_id,
        guild_id=guild_id,
        channel_id=channel_id,
        author=Author(id=author_id, name=name, nick=nick),
        content=content,
        timestamp=base + timedelta(seconds=seconds),
        **kwargs,
    )


@pytest.fixture
def redis_client() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def store(redis_client: InMemoryRedis) -> DictionaryStore:
    return DictionaryStore(redis_client)


@pytest.fixture
def reading_settings() -> ReadingSettings:
    return ReadingSettings()


@pytest.fixture
def normalizer(store: DictionaryStore, reading_settings: ReadingSettings) -> TextNormalizer:
    return TextNormalizer(store, settings=reading_settings)


@pytest.fixture
def make_message():
    """Factory for chat messages in the bound channel."""
    return build_message
