"""
Briefmark — Escaper

HTML-escapes `&`, `<`, `>` and `"`. Runs exactly once per render, after
reference extraction and before inline formatting. Placeholders are built
from uppercase letters and digits only, so they pass through untouched.
"""

from __future__ import annotations

from html import escape as _html_escape

from briefmark.types import EscapedText, TextWithPlaceholders


def escape_text(text: TextWithPlaceholders) -> EscapedText:
    """Escape placeholder-bearing text for insertion into HTML."""
    return EscapedText(escape(text))


def escape(text: str) -> str:
    """HTML-escape a single value (labels, ids) for element content or a double-quoted attribute."""
    return _html_escape(str(text), quote=False).replace('"', "&quot;")
