"""Tests for terminal rendering of blocks."""

import pytest
from rich.console import Console

from chatplan.blocks import Bold, Divider, Link, Text, to_blocks
from chatplan.models import Message, Section
from chatplan.render import (
    ICON_CHECKED,
    ICON_UNCHECKED,
    render_block,
    render_blocks,
    render_message,
    render_section,
    render_spans,
)


def _export(renderable) -> str:
    console = Console(record=True, width=60, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_render_spans_styles():
    text = render_spans([Text("a "), Bold("b"), Link("c", "http://x")])
    assert text.plain == "a bc"
    assert text.spans[0].style == "bold"
    assert text.spans[1].style.link == "http://x"


def test_render_checklist():
    out = _export(render_blocks(to_blocks("- [ ] open\n- [x] closed"))[0])
    assert f"{ICON_UNCHECKED} open" in out
    assert f"{ICON_CHECKED} closed" in out


def test_render_lists():
    out = _export(render_block(to_blocks("1. one\n2. two")[0]))
    assert "1. one" in out
    assert "2. two" in out


def test_render_code_block():
    out = _export(render_block(to_blocks("```python\nprint('hi')\n```")[0]))
    assert "print('hi')" in out
    assert "python" in out


def test_render_callout_and_quote():
    assert "📖 Docs" in _export(render_block(to_blocks("> 📖 Docs")[0]))
    assert "quoted" in _export(render_block(to_blocks("> quoted")[0]))


def test_render_divider():
    assert "─" in _export(render_block(Divider()))


def test_render_unknown_block():
    with pytest.raises(TypeError):
        render_block(object())


def test_render_section_levels():
    major = _export(render_section(Section(2, "Goals", "text"), to_blocks("text")))
    minor = _export(render_section(Section(3, "Detail", "text"), to_blocks("text")))
    assert "Goals" in major
    assert "  Detail" in minor


def test_render_message_title():
    out = _export(render_message(Message("ai", "hello"), to_blocks("hello")))
    assert "AI" in out
    assert "hello" in out
