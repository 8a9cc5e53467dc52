"""
Briefmark — Reference Extractor

Pulls `@mention` and `[[note link]]` occurrences out of raw text into a
per-call side table and replaces each with an opaque placeholder.

Pure function. No side effects beyond the returned table.

Syntax:
  @Name           mention; one word, extended across single spaces by words
                  that start with an uppercase letter ("@Acme Corp")
  @Known Name     mention; any name offered by the resolver, longest first,
                  matched case-insensitively
  [[Title]]       note link; 1..max chars, no "]" and no line break

Anything that does not match is left in place and later escaped as text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from briefmark.types import (
    Extraction,
    RawText,
    ReferenceKind,
    ReferenceTable,
    RenderOptions,
    TextWithPlaceholders,
)

_TRIGGER_RE = re.compile(r"@|\[\[")

# Characters allowed inside a mention word besides letters and digits
_MENTION_INNER = "_'’-."

# Stripped from the end of a captured mention label
_TRAILING_PUNCT = ".,!?;:'\"’”)]}>-"

# Uppercase and borderless: no proper prefix equals a suffix
_SENTINEL_BASE = "BMREF"
_TERMINATOR_BASE = "FERMB"
_PAD = "Q"


def extract_references(
    text: RawText,
    candidates: Iterable[str] = (),
    options: RenderOptions | None = None,
) -> Extraction:
    """
    Replace every reference in `text` with a placeholder.

    Args:
        text: Raw source text
        candidates: Known mention names (eager resolution); matched before
            the generic mention syntax so multi-word names are captured whole
        options: Length limits; defaults from settings

    Returns:
        Extraction with the placeholder-bearing text and its side table
    """
    opts = options or RenderOptions()
    sentinel, terminator = _choose_markers(text)
    table = ReferenceTable(sentinel=sentinel, terminator=terminator)
    names = _prepare_candidates(candidates, opts.max_mention_length)

    parts: list[str] = []
    pos = 0
    length = len(text)
    while pos < length:
        match = _TRIGGER_RE.search(text, pos)
        if match is None:
            parts.append(text[pos:])
            break
        start = match.start()
        parts.append(text[pos:start])

        if match.group() == "@":
            found = _match_mention(text, start, names, opts.max_mention_length)
            kind = ReferenceKind.ENTITY
        else:
            found = _match_note_link(text, start, opts.max_note_title_length)
            kind = ReferenceKind.NOTE

        if found is None:
            parts.append(text[start])
            pos = start + 1
            continue

        label, end = found
        parts.append(table.add(kind, label))
        pos = end

    return Extraction(text=TextWithPlaceholders("".join(parts)), table=table)


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _choose_markers(text: str) -> tuple[str, str]:
    pad = ""
    while True:
        sentinel = _SENTINEL_BASE + pad
        terminator = _TERMINATOR_BASE + pad
        if sentinel not in text and terminator not in text:
            return sentinel, terminator
        pad += _PAD


def _prepare_candidates(candidates: Iterable[str], max_length: int) -> list[str]:
    """Deduplicate (case-insensitively) and sort longest first."""
    seen: set[str] = set()
    names: list[str] = []
    for name in candidates:
        name = name.strip()
        if not name or len(name) > max_length or "\n" in name:
            continue
        key = name.casefold()
        if key in seen:
            continue
        seen.add(key)
        names.append(name)
    names.sort(key=len, reverse=True)
    return names


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _is_mention_char(ch: str) -> bool:
    return ch.isalnum() or ch in _MENTION_INNER


def _read_word(text: str, start: int) -> int:
    end = start
    while end < len(text) and _is_mention_char(text[end]):
        end += 1
    return end


def _match_mention(text: str, at: int, names: list[str], max_length: int) -> tuple[str, int] | None:
    """Return (label, end) for a mention starting with "@" at `at`."""
    if at > 0 and _is_word_char(text[at - 1]):
        return None  # e-mail address or similar
    start = at + 1

    for name in names:
        end = start + len(name)
        if text[start:end].casefold() != name.casefold():
            continue
        if end < len(text) and _is_word_char(text[end]):
            continue
        return text[start:end], end

    word_end = _read_word(text, start)
    word = text[start:word_end]
    label = word.rstrip(_TRAILING_PUNCT)
    if not label or len(label) > max_length:
        return None
    end = start + len(label)

    # Absorb following capitalized words: "@Acme Corp"
    clean = label == word
    while clean:
        if end + 1 >= len(text) or text[end] != " " or not text[end + 1].isupper():
            break
        word_end = _read_word(text, end + 1)
        word = text[end + 1 : word_end]
        part = word.rstrip(_TRAILING_PUNCT)
        if not part or len(label) + 1 + len(part) > max_length:
            break
        label = f"{label} {part}"
        end += 1 + len(part)
        clean = part == word

    return label, end


def _match_note_link(text: str, at: int, max_length: int) -> tuple[str, int] | None:
    """Return (title, end) for a note link starting with "[[" at `at`."""
    start = at + 2
    close = text.find("]", start, start + max_length + 1)
    if close == -1 or not text.startswith("]]", close):
        return None
    inner = text[start:close]
    if not inner or len(inner) > max_length or "\n" in inner:
        return None
    title = inner.strip()
    if not title:
        return None
    return title, close + 2
