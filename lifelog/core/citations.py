"""
Inline citation syntax shared by conversation prompts and renderers.

A citation is the literal token ``[[ID:<memory-id>]]`` embedded in prose.
Decoding splits the text into alternating plain-text and citation segments
whose concatenation is always the original string.
"""

import re
from collections.abc import Iterable

from pydantic import BaseModel

from lifelog.models.memory import Memory
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)

CITATION_SPLIT_PATTERN = re.compile(r"(\[\[ID:.*?\]\])")
CITATION_PATTERN = re.compile(r"\[\[ID:(.*?)\]\]")


class TextSegment(BaseModel):
    """Plain prose between citations. May be empty."""

    text: str

    @property
    def raw(self) -> str:
        return self.text


class CitationSegment(BaseModel):
    """A decoded ``[[ID:x]]`` token."""

    memory_id: str
    raw: str
    resolved: bool | None = None  # None until checked against a memory set


Segment = TextSegment | CitationSegment


def encode(memory_id: str) -> str:
    """Render a citation token for a memory id."""
    return f"[[ID:{memory_id}]]"


def decode(text: str) -> list[Segment]:
    """
    Split text into plain-text and citation segments in original order.

    Unterminated tokens such as ``[[ID:7`` stay plain text. Ids are not
    checked against any memory set here.
    """
    segments: list[Segment] = []
    for index, part in enumerate(CITATION_SPLIT_PATTERN.split(text)):
        # re.split with one capture group puts captures at odd indices
        if index % 2 == 1:
            match = CITATION_PATTERN.fullmatch(part)
            segments.append(CitationSegment(memory_id=match.group(1), raw=part))
        else:
            segments.append(TextSegment(text=part))
    return segments


def concat(segments: Iterable[Segment]) -> str:
    """Rebuild the original string from decoded segments."""
    return "".join(segment.raw for segment in segments)


def cited_ids(text: str) -> list[str]:
    """Memory ids cited in text, in order of appearance (duplicates kept)."""
    return CITATION_PATTERN.findall(text)


def resolve(segments: Iterable[Segment], memories: Iterable[Memory]) -> list[Segment]:
    """
    Mark each citation as resolved or dangling against a memory set.

    Dangling ids stay in place so they can render as inert links; they are
    only logged.
    """
    known = {memory.id for memory in memories}
    resolved: list[Segment] = []
    for segment in segments:
        if isinstance(segment, CitationSegment):
            found = segment.memory_id in known
            if not found:
                logger.debug(f"Unresolved citation: {segment.memory_id}")
            segment = segment.model_copy(update={"resolved": found})
        resolved.append(segment)
    return resolved
