"""
Briefmark Pipeline -- Block Scanner / List State Machine Tests

Line classification priority: heading, rule, task item, bullet item,
blank, paragraph. Lists open and close on item-kind changes.
"""

import pytest

from briefmark.blocks import ListStateMachine, classify_line, render_blocks
from briefmark.types import (
    Blank,
    BulletItem,
    EscapedText,
    Heading,
    ListState,
    Paragraph,
    Rule,
    TaskItem,
)

TASK_OPEN = '<ul class="task-list">'


def task_li(content, checked=False):
    state = "true" if checked else "false"
    box = "task-checkbox checked" if checked else "task-checkbox"
    return f'<li class="task-item" data-checked="{state}"><span class="{box}" aria-hidden="true"></span>{content}</li>'


def blocks(text):
    return render_blocks(EscapedText(text))


class TestClassifyLine:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ("# Title", Heading(level=1, content="Title")),
            ("### Three", Heading(level=3, content="Three")),
            ("###### Six", Heading(level=6, content="Six")),
            ("#  Spaced   ", Heading(level=1, content="Spaced")),
            ("---", Rule()),
            ("***", Rule()),
            ("___", Rule()),
            ("* * *", Rule()),
            ("-----", Rule()),
            ("- [ ] buy milk", TaskItem(checked=False, content="buy milk")),
            ("- [x] done", TaskItem(checked=True, content="done")),
            ("* [X] Done", TaskItem(checked=True, content="Done")),
            ("- [x]", TaskItem(checked=True, content="")),
            ("- item", BulletItem(content="item")),
            ("* item", BulletItem(content="item")),
            ("  - indented", BulletItem(content="indented")),
            ("", Blank()),
            ("   ", Blank()),
            ("plain text", Paragraph(content="plain text")),
        ],
    )
    def test_classification(self, line, expected):
        assert classify_line(line) == expected

    @pytest.mark.parametrize(
        "line",
        ["####### Seven", "#NoSpace", "#", "--", "-item", "*emphasis* start", "1. numbered"],
    )
    def test_falls_back_to_paragraph(self, line):
        assert classify_line(line) == Paragraph(content=line.strip())

    def test_task_needs_space_after_box(self):
        assert classify_line("- [x]done") == BulletItem(content="[x]done")

    def test_rule_takes_priority_over_bullet(self):
        assert classify_line("- - -") == Rule()


class TestListStateMachine:
    def test_starts_closed(self):
        machine = ListStateMachine()
        assert machine.state == ListState.NONE
        assert machine.close() == []

    def test_opens_and_extends(self):
        machine = ListStateMachine()
        assert machine.enter(BulletItem(content="a")) == ["<ul>"]
        assert machine.enter(BulletItem(content="b")) == []
        assert machine.state == ListState.IN_BULLET_LIST

    def test_switching_kind_closes_first(self):
        machine = ListStateMachine()
        machine.enter(BulletItem(content="a"))
        assert machine.enter(TaskItem(checked=False, content="b")) == ["</ul>", TASK_OPEN]
        assert machine.state == ListState.IN_TASK_LIST

    def test_non_list_block_closes(self):
        machine = ListStateMachine()
        machine.enter(TaskItem(checked=True, content="a"))
        assert machine.enter(Paragraph(content="p")) == ["</ul>"]
        assert machine.state == ListState.NONE

    def test_close_flushes_once(self):
        machine = ListStateMachine()
        machine.enter(BulletItem(content="a"))
        assert machine.close() == ["</ul>"]
        assert machine.close() == []


class TestRenderBlocks:
    def test_heading_and_paragraph(self):
        assert blocks("# Heading\n\nSome text") == ["<h1>Heading</h1>", "<p>Some text</p>"]

    def test_each_plain_line_is_a_paragraph(self):
        assert blocks("one\ntwo") == ["<p>one</p>", "<p>two</p>"]

    def test_rule(self):
        assert blocks("a\n---\nb") == ["<p>a</p>", "<hr>", "<p>b</p>"]

    def test_bullet_list(self):
        assert blocks("- a\n- b") == ["<ul>", "<li>a</li>", "<li>b</li>", "</ul>"]

    def test_task_list_is_one_container(self):
        assert blocks("- [ ] buy milk\n- [x] done") == [
            TASK_OPEN,
            task_li("buy milk"),
            task_li("done", checked=True),
            "</ul>",
        ]

    def test_task_then_bullet_switches_container(self):
        assert blocks("- [ ] a\n- b") == [TASK_OPEN, task_li("a"), "</ul>", "<ul>", "<li>b</li>", "</ul>"]

    def test_bullet_then_task_switches_container(self):
        assert blocks("- a\n- [x] b") == ["<ul>", "<li>a</li>", "</ul>", TASK_OPEN, task_li("b", True), "</ul>"]

    def test_blank_line_splits_lists(self):
        assert blocks("- a\n\n- b") == ["<ul>", "<li>a</li>", "</ul>", "<ul>", "<li>b</li>", "</ul>"]

    def test_paragraph_closes_list(self):
        assert blocks("- a\nText") == ["<ul>", "<li>a</li>", "</ul>", "<p>Text</p>"]

    def test_heading_closes_list(self):
        assert blocks("- a\n## Next") == ["<ul>", "<li>a</li>", "</ul>", "<h2>Next</h2>"]

    def test_end_of_input_flushes_list(self):
        assert blocks("intro\n- a")[-1] == "</ul>"

    def test_inline_formatting_in_every_block(self):
        assert blocks("# **H**\n- *b*\n- [ ] `t`\n__p__") == [
            "<h1><strong>H</strong></h1>",
            "<ul>",
            "<li><em>b</em></li>",
            "</ul>",
            TASK_OPEN,
            task_li("<code>t</code>"),
            "</ul>",
            "<p><strong>p</strong></p>",
        ]

    def test_empty_text(self):
        assert blocks("") == []
