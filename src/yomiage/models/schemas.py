"""Pydantic models for the reading pipeline."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class InsertResponse(str, Enum):
    """Outcome of adding a word to a guild dictionary."""

    SUCCESS = "success"
    WORD_ALREADY_EXISTS = "word_already_exists"


class RemoveResponse(str, Enum):
    """Outcome of removing a word from a guild dictionary."""

    SUCCESS = "success"
    WORD_DOES_NOT_EXIST = "word_does_not_exist"


# =============================================================================
# Dictionary
# =============================================================================


class DictionaryEntry(BaseModel):
    """One custom pronunciation mapping."""

    model_config = ConfigDict(frozen=True)

    guild_id: str
    word: str
    reading: str


# =============================================================================
# Chat messages
# =============================================================================


class Author(BaseModel):
    """Author of a chat message."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(..., description="Account-wide display name")
    nick: str | None = Field(default=None, description="Per-guild nickname")
    bot: bool = False

    @property
    def display_name(self) -> str:
        """Guild nickname if set, account name otherwise."""
        return self.nick or self.name


class MentionMap(BaseModel):
    """Names for the ids mentioned in a message, keyed by id."""

    users: dict[int, str] = Field(default_factory=dict)
    roles: dict[int, str] = Field(default_factory=dict)
    channels: dict[int, str] = Field(default_factory=dict)


class ChatMessage(BaseModel):
    """An incoming chat message, as seen by the reading pipeline."""

    model_config = ConfigDict(frozen=True)

    id: int
    guild_id: int | None = None
    channel_id: int
    author: Author
    content: str = ""
    timestamp: datetime
    mentions: MentionMap = Field(default_factory=MentionMap)
