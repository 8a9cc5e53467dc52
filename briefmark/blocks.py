"""
Briefmark — Block Scanner / List State Machine

Classifies lines and assembles block-level HTML.

Line classification, first match wins:
  heading     "#" x1-6, space, content
  rule        3+ of "-", "*" or "_" alone on the line (spaces allowed between)
  task item   "-"/"*", space, "[ ]"/"[x]"/"[X]", space, content
  bullet item "-"/"*", space, content
  blank       whitespace only
  paragraph   anything else, one <p> per line

List states: NONE → IN_BULLET_LIST / IN_TASK_LIST. Consecutive items of the
same kind extend the open list; an item of the other kind closes it and opens
a new one; any non-list line closes it; end of input flushes it.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from briefmark.inline import format_inline
from briefmark.types import (
    Blank,
    Block,
    BlockHtml,
    BulletItem,
    EscapedText,
    Heading,
    InlineHtml,
    ListState,
    Paragraph,
    Rule,
    TaskItem,
)

_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})[ \t]+(\S.*?)[ \t]*$")
_RULE_RE = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
_TASK_RE = re.compile(r"^[ \t]*[-*][ \t]+\[([ xX])\](?:[ \t]+(.*?))?[ \t]*$")
_BULLET_RE = re.compile(r"^[ \t]*[-*][ \t]+(\S.*?)[ \t]*$")

_LIST_OPEN: dict[ListState, str] = {
    ListState.IN_BULLET_LIST: "<ul>",
    ListState.IN_TASK_LIST: '<ul class="task-list">',
}
_LIST_CLOSE = "</ul>"


def classify_line(line: str) -> Block:
    """Classify a single line (no line terminator) into a Block."""
    m = _HEADING_RE.match(line)
    if m:
        return Heading(level=len(m.group(1)), content=m.group(2))
    if _RULE_RE.match(line):
        return Rule()
    m = _TASK_RE.match(line)
    if m:
        return TaskItem(checked=m.group(1) in "xX", content=m.group(2) or "")
    m = _BULLET_RE.match(line)
    if m:
        return BulletItem(content=m.group(1))
    if not line.strip():
        return Blank()
    return Paragraph(content=line.strip())


def scan_blocks(text: str) -> Iterator[Block]:
    """Yield one Block per line of `text`."""
    for line in text.split("\n"):
        yield classify_line(line)


class ListStateMachine:
    """Tracks which list container is open and emits open/close tags."""

    def __init__(self) -> None:
        self.state = ListState.NONE

    def enter(self, block: Block) -> list[str]:
        """Return the container tags to emit before `block`."""
        target = _list_state_for(block)
        if target == self.state:
            return []
        tags = self.close()
        if target != ListState.NONE:
            tags.append(_LIST_OPEN[target])
            self.state = target
        return tags

    def close(self) -> list[str]:
        """Close whatever list is open."""
        if self.state == ListState.NONE:
            return []
        self.state = ListState.NONE
        return [_LIST_CLOSE]


def render_blocks(
    text: EscapedText,
    inline: Callable[[EscapedText], InlineHtml] = format_inline,
) -> list[BlockHtml]:
    """
    Render escaped, placeholder-bearing text into block HTML fragments.

    Fragments still contain placeholders; the reinjector replaces them.
    The last fragment closes any list still open at end of input.
    """
    machine = ListStateMachine()
    fragments: list[BlockHtml] = []
    for block in scan_blocks(text):
        fragments.extend(BlockHtml(tag) for tag in machine.enter(block))
        html = render_block(block, inline)
        if html:
            fragments.append(html)
    fragments.extend(BlockHtml(tag) for tag in machine.close())
    return fragments


def render_block(
    block: Block,
    inline: Callable[[EscapedText], InlineHtml] = format_inline,
) -> BlockHtml:
    """Render one block's own element. Blank renders as the empty string."""
    if isinstance(block, Heading):
        content = inline(EscapedText(block.content))
        return BlockHtml(f"<h{block.level}>{content}</h{block.level}>")

    if isinstance(block, Rule):
        return BlockHtml("<hr>")

    if isinstance(block, TaskItem):
        content = inline(EscapedText(block.content))
        checked = "true" if block.checked else "false"
        box_class = "task-checkbox checked" if block.checked else "task-checkbox"
        return BlockHtml(
            f'<li class="task-item" data-checked="{checked}">'
            f'<span class="{box_class}" aria-hidden="true"></span>'
            f"{content}</li>"
        )

    if isinstance(block, BulletItem):
        return BlockHtml(f"<li>{inline(EscapedText(block.content))}</li>")

    if isinstance(block, Paragraph):
        return BlockHtml(f"<p>{inline(EscapedText(block.content))}</p>")

    return BlockHtml("")


def _list_state_for(block: Block) -> ListState:
    if isinstance(block, TaskItem):
        return ListState.IN_TASK_LIST
    if isinstance(block, BulletItem):
        return ListState.IN_BULLET_LIST
    return ListState.NONE
