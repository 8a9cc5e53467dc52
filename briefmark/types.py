"""
Briefmark — Shared Types

Data classes and stage wrapper types used across the render pipeline.
These are the contracts that bind the stages together:

  RawText → TextWithPlaceholders → EscapedText → InlineHtml / BlockHtml → SafeHtml

Each stage accepts exactly one of these and returns the next. Only the
escaper produces EscapedText; only the assembler produces SafeHtml.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import NewType

from briefmark.config import settings

# ---------------------------------------------------------------------------
# Stage wrapper types
# ---------------------------------------------------------------------------

RawText = NewType("RawText", str)
TextWithPlaceholders = NewType("TextWithPlaceholders", str)
EscapedText = NewType("EscapedText", str)
InlineHtml = NewType("InlineHtml", str)
BlockHtml = NewType("BlockHtml", str)
SafeHtml = NewType("SafeHtml", str)


# ---------------------------------------------------------------------------
# References
# ---------------------------------------------------------------------------


class ReferenceKind(str, Enum):
    ENTITY = "entity"
    NOTE = "note"


@dataclass(frozen=True)
class ReferenceToken:
    """One extracted `@mention` or `[[note link]]` occurrence."""

    index: int
    kind: ReferenceKind
    raw_label: str


@dataclass
class ReferenceTable:
    """
    Side table of extracted references for a single render call.

    `sentinel` and `terminator` bracket the token index inside each
    placeholder. Both are uppercase-only strings verified absent from the
    source text, so neither escaping (lowercase entities) nor markup (lowercase
    tags) can forge one.
    """

    sentinel: str
    terminator: str
    tokens: dict[int, ReferenceToken] = field(default_factory=dict)

    def add(self, kind: ReferenceKind, raw_label: str) -> str:
        """Record a token and return the placeholder that stands in for it."""
        index = len(self.tokens)
        self.tokens[index] = ReferenceToken(index=index, kind=kind, raw_label=raw_label)
        return self.placeholder(index)

    def placeholder(self, index: int) -> str:
        return f"{self.sentinel}{index}{self.terminator}"

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[ReferenceToken]:
        return iter(self.tokens[i] for i in sorted(self.tokens))


@dataclass(frozen=True)
class Extraction:
    """Result of the reference extractor."""

    text: TextWithPlaceholders
    table: ReferenceTable


@dataclass(frozen=True)
class ResolvedReference:
    """A token paired with the resolver's verdict."""

    token: ReferenceToken
    target_id: str | None = None
    inactive: bool = False

    @property
    def resolved(self) -> bool:
        return self.target_id is not None


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Heading:
    level: int
    content: str


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class TaskItem:
    checked: bool
    content: str


@dataclass(frozen=True)
class BulletItem:
    content: str


@dataclass(frozen=True)
class Paragraph:
    content: str


@dataclass(frozen=True)
class Blank:
    pass


Block = Heading | Rule | TaskItem | BulletItem | Paragraph | Blank


class ListState(str, Enum):
    NONE = "none"
    IN_BULLET_LIST = "in_bullet_list"
    IN_TASK_LIST = "in_task_list"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


@dataclass
class RenderOptions:
    """Options controlling how the renderer recognizes and emits references."""

    max_mention_length: int = field(default_factory=lambda: settings.MAX_MENTION_LENGTH)
    max_note_title_length: int = field(default_factory=lambda: settings.MAX_NOTE_TITLE_LENGTH)
    channel: str = "html"  # "html" or "text"
