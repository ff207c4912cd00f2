"""Yomiage models and schemas."""

from yomiage.models.schemas import (
    # Chat
    Author,
    ChatMessage,
    # Dictionary
    DictionaryEntry,
    # Enums
    InsertResponse,
    MentionMap,
    RemoveResponse,
)

__all__ = [
    # Enums
    "InsertResponse",
    "RemoveResponse",
    # Dictionary
    "DictionaryEntry",
    # Chat
    "Author",
    "ChatMessage",
    "MentionMap",
]
