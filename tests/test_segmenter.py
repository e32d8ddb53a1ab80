"""Unit and property-based tests for text segmentation."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from askai.chat import BlockSegmenter, Segment, segment, strip_code_fences
from askai.chat.segmenter import to_markdown


class TestBlockSegmenter:
    """Tests for BlockSegmenter."""

    @given(st.text().filter(lambda s: "```" not in s))
    def test_text_without_fences_is_one_segment(self, raw: str):
        """Property test: no fences yields one trimmed text segment."""
        segments = BlockSegmenter().segment(raw)

        assert segments == [Segment(kind="text", content=raw.strip())]

    def test_text_code_text(self):
        """Test the canonical before/code/after split."""
        segments = segment("before\n```js\ncode\n```\nafter")

        assert segments == [
            Segment(kind="text", content="before"),
            Segment(kind="code", language="js", content="code"),
            Segment(kind="text", content="after"),
        ]

    def test_missing_tag_defaults_to_text(self):
        """Test that an untagged fence gets the 'text' language."""
        segments = segment("```\nplain\n```")

        assert segments == [Segment(kind="code", language="text", content="plain")]

    def test_multiple_fences_keep_order(self):
        """Test that several fences come out in source order."""
        raw = "One:\n```python\nx = 1\n```\nTwo:\n```ts\nlet y = 2\n```"
        segments = segment(raw)

        assert [s.kind for s in segments] == ["text", "code", "text", "code"]
        assert segments[1].language == "python"
        assert segments[3].content == "let y = 2"

    def test_blank_text_between_fences_is_skipped(self):
        """Test that whitespace-only runs produce no text segment."""
        segments = segment("```js\na\n```\n   \n```js\nb\n```")

        assert [s.content for s in segments] == ["a", "b"]

    def test_empty_input(self):
        """Test that empty input still yields one (empty) text segment."""
        assert segment("") == [Segment(kind="text", content="")]

    def test_code_body_is_trimmed(self):
        """Test that code bodies lose surrounding blank lines."""
        segments = segment("```js\n\n  return 1;\n\n```")

        assert segments[0].content == "return 1;"

    def test_to_markdown_restores_structure(self):
        """Test that reassembly fences code with its tag."""
        segments = segment("before\n```js\ncode\n```\nafter")

        assert to_markdown(segments) == "before\n\n```js\ncode\n```\n\nafter"
        assert segment(to_markdown(segments)) == segments


class TestStripCodeFences:
    """Tests for strip_code_fences."""

    def test_fenced_reply_becomes_plain_code(self):
        """Test that a fenced reply is reduced to its body."""
        assert strip_code_fences("```js\nreturn a+b\n```") == "return a+b"

    def test_unfenced_reply_is_trimmed(self):
        """Test that plain replies are only trimmed."""
        assert strip_code_fences("  return 1;\n") == "return 1;"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("```js\nreturn a+b", "return a+b"),
            ("```javascript\nconst x = 1;\nreturn x;\n", "const x = 1;\nreturn x;"),
            ("```\nreturn 1", "return 1"),
        ],
    )
    def test_unclosed_fence_is_removed(self, raw, expected):
        """Test that a reply truncated inside a fence loses the opening marker."""
        assert strip_code_fences(raw) == expected

    def test_closed_then_unclosed_fence(self):
        assert strip_code_fences("```js\na\n```\n```js\nb") == "a\nb"
