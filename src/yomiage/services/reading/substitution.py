"""Dictionary substitution with leftmost-longest matching.

A ``DictionaryMatcher`` is built from a snapshot of a guild dictionary and
used for a single text. Alternatives of a regex are tried in order at each
position, so listing the words longest first gives leftmost-longest,
non-overlapping matches in one left-to-right scan.
"""

from __future__ import annotations

import re
from collections.abc import Mapping


class DictionaryMatcher:
    """Replaces every dictionary word in a text with its reading."""

    def __init__(self, dictionary: Mapping[str, str]) -> None:
        # Empty words would match between every character
        self._readings = {word: reading for word, reading in dictionary.items() if word}
        self._pattern = self._build_pattern(self._readings)

    @staticmethod
    def _build_pattern(readings: Mapping[str, str]) -> re.Pattern[str] | None:
        if not readings:
            return None
        words = sorted(readings, key=len, reverse=True)
        return re.compile("|".join(re.escape(word) for word in words))

    def __len__(self) -> int:
        return len(self._readings)

    def replace_all(self, text: str) -> str:
        """Rewrite ``text`` with every matched word replaced by its reading."""
        if self._pattern is None:
            return text
        return self._pattern.sub(lambda m: self._readings[m.group(0)], text)


def replace_words(text: str, dictionary: Mapping[str, str]) -> str:
    """Apply a dictionary snapshot to a text with a throwaway matcher."""
    return DictionaryMatcher(dictionary).replace_all(text)
