"""
Briefmark — Reference Reinjector

Replaces every placeholder with chip markup, consulting the resolver.

  resolved    <span class="ref-chip ref-entity" data-ref-kind="entity"
                    data-ref-label="Acme" data-ref-id="e1"
                    data-resolved="true">@Acme</span>
  unresolved  same element without data-ref-id, data-resolved="false"

The UI attaches one click listener to the container and reads these
attributes from the nearest chip. The label is escaped here, once; it was
removed from the text before the escaper ran.
"""

from __future__ import annotations

import re

from briefmark.escaper import escape
from briefmark.resolver import Resolver
from briefmark.types import BlockHtml, ReferenceKind, ReferenceTable, ResolvedReference


def placeholder_pattern(table: ReferenceTable) -> re.Pattern[str]:
    return re.compile(f"{re.escape(table.sentinel)}(\\d+){re.escape(table.terminator)}")


def reinject(html: BlockHtml, table: ReferenceTable, resolver: Resolver) -> BlockHtml:
    """Replace placeholders in one block fragment with chip markup."""
    if not table:
        return html

    def replace(m: re.Match) -> str:
        token = table.tokens.get(int(m.group(1)))
        if token is None:
            return m.group(0)
        return render_chip(resolver.resolve(token))

    return BlockHtml(placeholder_pattern(table).sub(replace, html))


def reinject_plain(text: str, table: ReferenceTable) -> str:
    """Replace placeholders with bare labels for the plain-text channel."""
    if not table:
        return text

    def replace(m: re.Match) -> str:
        token = table.tokens.get(int(m.group(1)))
        if token is None:
            return m.group(0)
        if token.kind == ReferenceKind.ENTITY:
            return f"@{token.raw_label}"
        return token.raw_label

    return placeholder_pattern(table).sub(replace, text)


def render_chip(ref: ResolvedReference) -> str:
    """Chip element for one resolved or unresolved reference."""
    kind = ref.token.kind.value
    label = escape(ref.token.raw_label)
    text = f"@{label}" if ref.token.kind == ReferenceKind.ENTITY else label

    attrs = [
        f'class="ref-chip ref-{kind}"',
        f'data-ref-kind="{kind}"',
        f'data-ref-label="{label}"',
    ]
    if ref.target_id is not None:
        attrs.append(f'data-ref-id="{escape(ref.target_id)}"')
        attrs.append('data-resolved="true"')
        if ref.inactive:
            attrs.append('data-ref-inactive="true"')
    else:
        attrs.append('data-resolved="false"')

    return f"<span {' '.join(attrs)}>{text}</span>"
