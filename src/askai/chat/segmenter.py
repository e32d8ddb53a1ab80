"""Segmentation of generated text into text and fenced-code runs."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict

DEFAULT_CODE_LANGUAGE = "text"

# ```<tag>\n<body>```
_FENCE = re.compile(r"```[ \t]*([^\s`]*)[ \t]*\r?\n(.*?)```", re.DOTALL)
# ```<tag>\n<body> with no closing marker
_UNCLOSED_FENCE = re.compile(r"```[ \t]*[^\s`]*[ \t]*\r?\n(.*)\Z", re.DOTALL)


class Segment(BaseModel):
    """One contiguous run of text or fenced code."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text", "code"]
    content: str
    language: str | None = None


class BlockSegmenter:
    """Splits raw generated text into ordered segments.

    Segmentation is total: any input yields at least one segment.
    """

    def segment(self, raw: str) -> list[Segment]:
        """Split text around fenced code blocks.

        Args:
            raw: Generated text

        Returns:
            Segments in source order. Without fences, a single text
            segment holding the trimmed input (possibly empty).
        """
        segments: list[Segment] = []
        cursor = 0

        for match in _FENCE.finditer(raw):
            before = raw[cursor:match.start()].strip()
            if before:
                segments.append(Segment(kind="text", content=before))
            segments.append(Segment(
                kind="code",
                language=match.group(1) or DEFAULT_CODE_LANGUAGE,
                content=match.group(2).strip(),
            ))
            cursor = match.end()

        if not segments:
            return [Segment(kind="text", content=raw.strip())]

        after = raw[cursor:].strip()
        if after:
            segments.append(Segment(kind="text", content=after))
        return segments


def segment(raw: str) -> list[Segment]:
    """Module-level shortcut for ``BlockSegmenter().segment``."""
    return BlockSegmenter().segment(raw)


def code_blocks(segments: list[Segment]) -> list[Segment]:
    return [s for s in segments if s.kind == "code"]


def to_markdown(segments: list[Segment]) -> str:
    """Reassemble segments, fencing code with its language tag."""
    parts = []
    for s in segments:
        if s.kind == "code":
            parts.append(f"```{s.language}\n{s.content}\n```")
        else:
            parts.append(s.content)
    return "\n\n".join(parts)


def strip_code_fences(raw: str) -> str:
    """Replace every fenced block by its body and trim the result.

    A trailing fence that was opened but never closed, as in a reply cut
    off at the token limit, loses its opening marker.
    """
    text = _FENCE.sub(lambda m: m.group(2).strip(), raw)
    text = _UNCLOSED_FENCE.sub(lambda m: m.group(1), text)
    return text.strip()
