"""Text Normalizer - Builds the text read aloud for one chat message.

Pipeline:
1. Author announcement (``name。``) unless the same author spoke recently
2. Mention resolution and markdown stripping
3. URL scrubbing
4. Guild dictionary substitution
5. Length capping
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol

from yomiage.config import ReadingSettings
from yomiage.errors import TransportError, YomiageError
from yomiage.services.reading.markup import resolve_mentions, to_plain_text
from yomiage.services.reading.substitution import replace_words

if TYPE_CHECKING:
    from yomiage.models.schemas import Author, ChatMessage
    from yomiage.services.dictionary import DictionaryStore

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"https?://[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")


class NameResolver(Protocol):
    """Looks up the name an author is announced with."""

    async def resolve_display_name(self, author: Author, guild_id: int) -> str:
        """Guild nickname if set, account display name otherwise."""
        ...


class AuthorNameResolver:
    """Resolves names from the nickname carried on the message author."""

    async def resolve_display_name(self, author: Author, guild_id: int) -> str:
        return author.display_name


def remove_url(text: str, replacement: str = "、") -> str:
    """Replace every URL in the text with ``replacement``.

    Closing parentheses at the end of a URL without a matching opening one
    belong to the surrounding text, as in ``(https://example.com)``.
    """

    def _replace(match: re.Match[str]) -> str:
        url = match.group(0)
        trailing = ""
        while url.endswith(")") and url.count(")") > url.count("("):
            url = url[:-1]
            trailing += ")"
        return replacement + trailing

    return URL_PATTERN.sub(_replace, text)


def limit_length(text: str, settings: ReadingSettings) -> str:
    """Cut text longer than ``max_chars`` and append the omission marker."""
    if len(text) > settings.max_chars:
        return text[: settings.truncated_chars] + settings.omission_marker
    return text


class TextNormalizer:
    """Produces the bounded speech text for a message.

    The dictionary is fetched for every message and a new matcher is built
    from it, so dictionary edits apply to the very next message.
    """

    def __init__(
        self,
        dictionary_store: DictionaryStore,
        name_resolver: NameResolver | None = None,
        settings: ReadingSettings | None = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            dictionary_store: Source of the guild dictionaries
            name_resolver: Author name lookup. Defaults to the message's own nickname.
            settings: Reading limits. Defaults to environment configuration.
        """
        self._dictionary = dictionary_store
        self._names = name_resolver or AuthorNameResolver()
        self._settings = settings or ReadingSettings()

    @property
    def settings(self) -> ReadingSettings:
        return self._settings

    def should_read_author_name(
        self, message: ChatMessage, last_message: ChatMessage | None
    ) -> bool:
        """Check whether the author must be announced before the message."""
        if last_message is None:
            return True

        window = timedelta(seconds=self._settings.author_repeat_window_seconds)
        return (
            message.author.id != last_message.author.id
            or (message.timestamp - last_message.timestamp) > window
        )

    async def build_read_text(
        self, message: ChatMessage, last_message: ChatMessage | None = None
    ) -> str:
        """Build the text to read aloud for ``message``.

        Args:
            message: The incoming message
            last_message: The previous message read aloud in the bound channel

        Returns:
            The normalized text, at most ``truncated_chars`` plus the marker long

        Raises:
            TransportError: If the dictionary or author name could not be fetched
        """
        if message.guild_id is None:
            raise ValueError("Only guild messages can be read aloud")

        settings = self._settings
        text = ""

        if self.should_read_author_name(message, last_message):
            try:
                author_name = await self._names.resolve_display_name(
                    message.author, message.guild_id
                )
            except YomiageError:
                raise
            except Exception as e:
                raise TransportError(
                    f"Could not resolve name of author {message.author.id}: {e}"
                ) from e
            text += remove_url(author_name, settings.url_replacement)
            text += settings.author_separator

        content = resolve_mentions(message.content, message.mentions)
        text += remove_url(to_plain_text(content), settings.url_replacement)

        dictionary = await self._dictionary.get_all(message.guild_id)
        text = replace_words(text, dictionary)

        return limit_length(text, settings)
