"""
Briefmark — safe rendering of chat replies and brief summaries.

A small Markdown dialect (headings, rules, bullet and task lists, bold,
italic, code) plus two reference forms, `@mention` and `[[note link]]`,
rendered as clickable chips.

Public API:
  render              text → safe HTML
  render_text         text → plain text
  collect_references  text → references found, with their verdicts
  EagerResolver / LazyResolver  reference resolution strategies
"""

from briefmark.models import ReferenceTarget
from briefmark.renderer import collect_references, render, render_text
from briefmark.resolver import EagerResolver, LazyResolver, Resolver
from briefmark.types import ReferenceKind, RenderOptions, ResolvedReference

__version__ = "0.1.0"

__all__ = [
    "render",
    "render_text",
    "collect_references",
    "EagerResolver",
    "LazyResolver",
    "Resolver",
    "ReferenceTarget",
    "ReferenceKind",
    "RenderOptions",
    "ResolvedReference",
]
