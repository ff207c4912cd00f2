"""Reading pipeline: substitution, markup stripping and normalization."""

from yomiage.services.reading.normalizer import (
    AuthorNameResolver,
    NameResolver,
    TextNormalizer,
    limit_length,
    remove_url,
)
from yomiage.services.reading.substitution import DictionaryMatcher, replace_words

__all__ = [
    "AuthorNameResolver",
    "DictionaryMatcher",
    "NameResolver",
    "TextNormalizer",
    "limit_length",
    "remove_url",
    "replace_words",
]
