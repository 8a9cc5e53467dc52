"""
Briefmark — Inline Formatter

Bold, italic and code spans within a single block's content.

  ***text***          → <strong><em>text</em></strong>
  **text** / __text__ → <strong>text</strong>
  *text*   / _text_   → <em>text</em>
  `text`              → <code>text</code>

Single left-to-right scan. A delimiter run opens only if it is at most three
characters long and is followed by a non-space; it closes on the first run of
exactly the same length that is preceded by a non-space. Runs of another
length inside the span are left for the recursive pass over its content.
`_` never opens or closes inside a word. Code span content is literal.
Anything unmatched is emitted as-is, so no unbalanced tag is ever produced.

A failed closer search is remembered for the rest of the pass: once an opener
of a given character and length finds no closer, no later opener of the same
kind can, and the same holds for code runs of a given length. Each search
therefore reaches the end of the content at most once per kind, which keeps
a line full of unmatched markers linear.

Placeholders contain only uppercase letters and digits and are never split.
"""

from __future__ import annotations

from dataclasses import dataclass

from briefmark.types import EscapedText, InlineHtml, TextWithPlaceholders

_EMPHASIS = "*_"
_CODE = "`"
_SPECIAL = _EMPHASIS + _CODE


@dataclass(frozen=True)
class InlineMarkup:
    """Open/close strings emitted for each span kind."""

    strong: tuple[str, str]
    em: tuple[str, str]
    code: tuple[str, str]


HTML_MARKUP = InlineMarkup(
    strong=("<strong>", "</strong>"),
    em=("<em>", "</em>"),
    code=("<code>", "</code>"),
)

PLAIN_MARKUP = InlineMarkup(strong=("", ""), em=("", ""), code=("", ""))


def format_inline(text: EscapedText) -> InlineHtml:
    """Apply inline formatting to escaped block content."""
    return InlineHtml(_format(text, HTML_MARKUP))


def strip_inline(text: TextWithPlaceholders) -> TextWithPlaceholders:
    """Remove matched emphasis and code delimiters, keeping their content."""
    return TextWithPlaceholders(_format(text, PLAIN_MARKUP))


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def _format(text: str, markup: InlineMarkup) -> str:
    out: list[str] = []
    failed_emphasis: set[tuple[str, int]] = set()
    failed_code: dict[int, int] = {}
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == _CODE:
            run = _run_length(text, i)
            close = _find_code_close(text, i + run, run, failed_code)
            if close is not None:
                out.append(f"{markup.code[0]}{text[i + run : close]}{markup.code[1]}")
                i = close + run
            else:
                out.append(text[i : i + run])
                i += run
            continue

        if ch in _EMPHASIS:
            run = _run_length(text, i)
            close = None
            if (ch, run) not in failed_emphasis and _can_open(text, i, run):
                close = _find_emphasis_close(text, i, run, failed_code)
                if close is None:
                    failed_emphasis.add((ch, run))
            if close is not None:
                inner = _format(text[i + run : close], markup)
                out.append(_wrap(inner, run, markup))
                i = close + run
            else:
                out.append(text[i : i + run])
                i += run
            continue

        j = i + 1
        while j < n and text[j] not in _SPECIAL:
            j += 1
        out.append(text[i:j])
        i = j

    return "".join(out)


def _wrap(inner: str, run: int, markup: InlineMarkup) -> str:
    if run == 1:
        return f"{markup.em[0]}{inner}{markup.em[1]}"
    if run == 2:
        return f"{markup.strong[0]}{inner}{markup.strong[1]}"
    return f"{markup.strong[0]}{markup.em[0]}{inner}{markup.em[1]}{markup.strong[1]}"


def _run_length(text: str, i: int) -> int:
    ch = text[i]
    j = i
    while j < len(text) and text[j] == ch:
        j += 1
    return j - i


def _can_open(text: str, i: int, run: int) -> bool:
    if run > 3:
        return False
    after = i + run
    if after >= len(text) or text[after].isspace():
        return False
    if text[i] == "_" and i > 0 and text[i - 1].isalnum():
        return False
    return True


def _can_close(text: str, j: int, run: int, content_start: int) -> bool:
    if j <= content_start or text[j - 1].isspace():
        return False
    if text[j] == "_" and j + run < len(text) and text[j + run].isalnum():
        return False
    return True


def _find_emphasis_close(text: str, opener: int, run: int, failed_code: dict[int, int]) -> int | None:
    """Index of the closing run for the opener at `opener`, or None."""
    ch = text[opener]
    start = opener + run
    j = start
    n = len(text)
    while j < n:
        c = text[j]
        if c == _CODE:
            r = _run_length(text, j)
            code_close = _find_code_close(text, j + r, r, failed_code)
            j = code_close + r if code_close is not None else j + r
            continue
        if c == ch:
            r = _run_length(text, j)
            if r == run and _can_close(text, j, r, start):
                return j
            j += r
            continue
        j += 1
    return None


def _find_code_close(text: str, start: int, run: int, failed: dict[int, int]) -> int | None:
    # failed maps a run length to the earliest start known to have no closer
    if run in failed and start >= failed[run]:
        return None
    j = start
    while True:
        k = text.find(_CODE, j)
        if k == -1:
            failed[run] = min(start, failed.get(run, start))
            return None
        r = _run_length(text, k)
        if r == run and k > start:
            return k
        j = k + r
