"""Tests for mention resolution and markdown stripping."""

from __future__ import annotations

import pytest

from yomiage.models.schemas import MentionMap
from yomiage.services.reading.markup import resolve_mentions, to_plain_text


@pytest.fixture
def mentions() -> MentionMap:
    return MentionMap(
        users={42: "bob"},
        roles={7: "mods"},
        channels={3: "general"},
    )


class TestResolveMentions:
    """Tests for resolve_mentions."""

    def test_user_mention(self, mentions: MentionMap) -> None:
        assert resolve_mentions("<@42> hi", mentions) == "@bob hi"

    def test_nickname_mention_syntax(self, mentions: MentionMap) -> None:
        assert resolve_mentions("<@!42> hi", mentions) == "@bob hi"

    def test_role_mention(self, mentions: MentionMap) -> None:
        assert resolve_mentions("ping <@&7>", mentions) == "ping @mods"

    def test_channel_mention(self, mentions: MentionMap) -> None:
        assert resolve_mentions("see <#3>", mentions) == "see #general"

    def test_unknown_ids(self, mentions: MentionMap) -> None:
        text = "<@1> <@&2> <#4>"
        assert resolve_mentions(text, mentions) == "@deleted-user @deleted-role #deleted-channel"

    def test_custom_emoji_reads_as_name(self, mentions: MentionMap) -> None:
        assert resolve_mentions("nice <:thumbsup:123> <a:party:456>", mentions) == (
            "nice thumbsup party"
        )

    def test_plain_text_untouched(self, mentions: MentionMap) -> None:
        assert resolve_mentions("1 < 2 > 0", mentions) == "1 < 2 > 0"


class TestToPlainText:
    """Tests for to_plain_text."""

    @pytest.mark.parametrize(
        "markdown,expected",
        [
            ("**bold** text", "bold text"),
            ("*italic* text", "italic text"),
            ("_italic_ text", "italic text"),
            ("__underline__", "underline"),
            ("~~strike~~", "strike"),
            ("||spoiler||", "spoiler"),
            ("***both***", "both"),
            ("`code`", "code"),
            ("> quoted", "quoted"),
            (">>> quoted\nlines", "quoted\nlines"),
            ("# heading", "heading"),
            ("[docs](https://example.com/docs)", "docs"),
            ("**run `ls` now**", "run ls now"),
            ("*`a*b`*", "a*b"),
            ("**1** and 2", "1 and 2"),
            ("こんにちは", "こんにちは"),
        ],
    )
    def test_formatting_removed(self, markdown: str, expected: str) -> None:
        assert to_plain_text(markdown) == expected

    def test_code_block_keeps_content_only(self) -> None:
        assert to_plain_text("```py\nprint(1)\n```") == "print(1)\n"

    def test_single_line_code_block(self) -> None:
        assert to_plain_text("```hello```") == "hello"

    def test_markup_inside_code_is_literal(self) -> None:
        assert to_plain_text("`**not bold**`") == "**not bold**"

    def test_escaped_characters(self) -> None:
        assert to_plain_text(r"\*literal\*") == "*literal*"

    def test_snake_case_untouched(self) -> None:
        assert to_plain_text("snake_case_name") == "snake_case_name"

    def test_arithmetic_untouched(self) -> None:
        assert to_plain_text("2 * 3 * 4") == "2 * 3 * 4"

    def test_channel_name_is_not_a_heading(self) -> None:
        assert to_plain_text("#general") == "#general"
