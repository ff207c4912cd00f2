"""Mention resolution and chat markdown stripping.

Speech output must never contain raw ``<@123>`` style identifiers or
markdown syntax, only the text a reader would see.
"""

from __future__ import annotations

import re

from yomiage.models.schemas import MentionMap

USER_MENTION = re.compile(r"<@!?(\d+)>")
ROLE_MENTION = re.compile(r"<@&(\d+)>")
CHANNEL_MENTION = re.compile(r"<#(\d+)>")
CUSTOM_EMOJI = re.compile(r"<a?:(\w+):\d+>")

# Code is kept verbatim; escapes yield their literal character
LITERAL_TOKEN = re.compile(
    r"```(?:[^\n`]*\n)?(?P<block>[\s\S]*?)```"
    r"|`(?P<inline>[^`\n]+)`"
    r"|\\(?P<escaped>[*_~|`>\\\[\]()#-])"
)
# Stands in for a literal while formatting is stripped
PLACEHOLDER = re.compile(r"\uE000(\d+)\uE001")

# Applied in order; bold before italic
FORMATTING_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\[([^\]\n]+)\]\((?:https?://[^)\s]+)\)"), r"\1"),
    (re.compile(r"\|\|(.+?)\|\|", re.DOTALL), r"\1"),
    (re.compile(r"\*\*(.+?)\*\*", re.DOTALL), r"\1"),
    (re.compile(r"__(.+?)__", re.DOTALL), r"\1"),
    (re.compile(r"~~(.+?)~~", re.DOTALL), r"\1"),
    (re.compile(r"\*(?!\s)(.+?)(?<!\s)\*", re.DOTALL), r"\1"),
    (re.compile(r"(?<!\w)_(?!\s)(.+?)(?<!\s)_(?!\w)", re.DOTALL), r"\1"),
    (re.compile(r"^>>> ?", re.MULTILINE), ""),
    (re.compile(r"^> ?", re.MULTILINE), ""),
    (re.compile(r"^#{1,3} +", re.MULTILINE), ""),
]


def resolve_mentions(text: str, mentions: MentionMap) -> str:
    """Replace mention syntax with the names it refers to."""
    text = USER_MENTION.sub(
        lambda m: "@" + mentions.users.get(int(m.group(1)), "deleted-user"), text
    )
    text = ROLE_MENTION.sub(
        lambda m: "@" + mentions.roles.get(int(m.group(1)), "deleted-role"), text
    )
    text = CHANNEL_MENTION.sub(
        lambda m: "#" + mentions.channels.get(int(m.group(1)), "deleted-channel"), text
    )
    return CUSTOM_EMOJI.sub(r"\1", text)


def _strip_formatting(text: str) -> str:
    for pattern, replacement in FORMATTING_RULES:
        text = pattern.sub(replacement, text)
    return text


def to_plain_text(text: str) -> str:
    """Strip markdown from a chat message, keeping its literal text.

    Args:
        text: Message content with mentions already resolved

    Returns:
        The content without emphasis, spoiler, quote or code syntax
    """
    literals: list[str] = []

    def _hold(match: re.Match[str]) -> str:
        literal = match.group("block")
        if literal is None:
            literal = match.group("inline")
        if literal is None:
            literal = match.group("escaped")
        literals.append(literal)
        return f"\uE000{len(literals) - 1}\uE001"

    text = _strip_formatting(LITERAL_TOKEN.sub(_hold, text))
    return PLACEHOLDER.sub(lambda m: literals[int(m.group(1))], text)
