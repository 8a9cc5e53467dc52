"""
Briefmark — Renderer

Pure function: (text, references?, options?) → HTML string (or text string)
No IO. No shared state. Deterministic: same input → same output, always.

Pipeline, in fixed order:
  1. extract_references   @mentions and [[note links]] → placeholders
  2. escape_text          & < > " escaped, exactly once
  3. render_blocks        line classification, list state machine,
                          inline formatting of each block's content
  4. reinject             placeholders → chips, via the resolver
  5. assemble             fragments joined in document order

Any input renders. Malformed markup degrades to escaped literal text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from briefmark.blocks import render_blocks, scan_blocks
from briefmark.escaper import escape_text
from briefmark.inline import strip_inline
from briefmark.models import ReferenceTarget
from briefmark.references import extract_references
from briefmark.reinject import reinject, reinject_plain
from briefmark.resolver import EagerResolver, LazyResolver, Resolver
from briefmark.types import (
    Blank,
    Block,
    BlockHtml,
    BulletItem,
    Heading,
    RawText,
    RenderOptions,
    ResolvedReference,
    Rule,
    SafeHtml,
    TaskItem,
    TextWithPlaceholders,
)

logger = logging.getLogger(__name__)

References = Iterable[ReferenceTarget | Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(
    text: str,
    references: References | None = None,
    options: RenderOptions | None = None,
    resolver: Resolver | None = None,
) -> str:
    """
    Render message text to HTML safe for insertion.

    Passing `references` (even an empty list) selects eager resolution.
    Passing neither `references` nor `resolver` selects lazy resolution.
    Pure function. No side effects. No IO.
    """
    opts = options or RenderOptions()
    strategy = _choose_resolver(references, resolver)

    if opts.channel == "text":
        return _render_text(text, strategy, opts)

    return _render_html(text, strategy, opts)


def render_text(
    text: str,
    references: References | None = None,
    options: RenderOptions | None = None,
    resolver: Resolver | None = None,
) -> str:
    """
    Render message text as plain text (notifications, clipboard, terminal).

    Same block and reference recognition as `render`, markup removed.
    The result is not escaped and must never be inserted as HTML.
    """
    opts = options or RenderOptions()
    return _render_text(text, _choose_resolver(references, resolver), opts)


def collect_references(
    text: str,
    references: References | None = None,
    options: RenderOptions | None = None,
    resolver: Resolver | None = None,
) -> list[ResolvedReference]:
    """Return the references found in `text`, in document order, with their verdicts."""
    opts = options or RenderOptions()
    strategy = _choose_resolver(references, resolver)
    extraction = extract_references(_normalize(text), strategy.candidates(), opts)
    return [strategy.resolve(token) for token in extraction.table]


def assemble(fragments: Iterable[BlockHtml]) -> SafeHtml:
    """Concatenate block fragments in document order."""
    return SafeHtml("\n".join(fragments))


# ---------------------------------------------------------------------------
# HTML channel
# ---------------------------------------------------------------------------


def _render_html(text: str, resolver: Resolver, opts: RenderOptions) -> SafeHtml:
    extraction = extract_references(_normalize(text), resolver.candidates(), opts)
    escaped = escape_text(extraction.text)
    fragments = [reinject(f, extraction.table, resolver) for f in render_blocks(escaped)]

    logger.debug(
        "render: %d chars, %d references, %s",
        len(text or ""),
        len(extraction.table),
        type(resolver).__name__,
    )
    return assemble(fragments)


# ---------------------------------------------------------------------------
# Text channel
# ---------------------------------------------------------------------------

_TASK_GLYPHS = {True: "☑", False: "☐"}


def _render_text(text: str, resolver: Resolver, opts: RenderOptions) -> str:
    extraction = extract_references(_normalize(text), resolver.candidates(), opts)
    lines = [_plain_block(block) for block in scan_blocks(extraction.text)]
    return reinject_plain("\n".join(lines).strip("\n"), extraction.table)


def _plain_block(block: Block) -> str:
    if isinstance(block, Heading):
        return _strip(block.content)
    if isinstance(block, Rule):
        return "---"
    if isinstance(block, TaskItem):
        return f"{_TASK_GLYPHS[block.checked]} {_strip(block.content)}".rstrip()
    if isinstance(block, BulletItem):
        return f"• {_strip(block.content)}"
    if isinstance(block, Blank):
        return ""
    return _strip(block.content)


def _strip(content: str) -> str:
    return strip_inline(TextWithPlaceholders(content))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _choose_resolver(references: References | None, resolver: Resolver | None) -> Resolver:
    if references is not None and resolver is not None:
        raise ValueError("Pass either references or resolver, not both")
    if resolver is not None:
        return resolver
    if references is not None:
        return EagerResolver(references)
    return LazyResolver()


def _normalize(text: str) -> RawText:
    return RawText((text or "").replace("\r\n", "\n").replace("\r", "\n"))
