"""Terminal presentation of rendered blocks using rich."""

from __future__ import annotations

from typing import Iterable

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.style import Style
from rich.syntax import Syntax
from rich.text import Text

from chatplan.blocks import (
    Block,
    Blockquote,
    BulletList,
    Callout,
    Checklist,
    CodeBlock,
    Divider,
    OrderedList,
    Paragraph,
    Span,
)
from chatplan.constants import ROLE_HEADINGS
from chatplan.models import Message, Section

ICON_CHECKED = "☑"
ICON_UNCHECKED = "☐"
BULLET = "•"

_SPAN_STYLES = {
    "text": "",
    "bold": "bold",
    "italic": "italic",
    "code": "bold cyan",
}


def render_spans(spans: Iterable[Span], style: str = "") -> Text:
    """Build a styled Text from inline spans."""
    text = Text(style=style)
    for span in spans:
        if span.kind == "link":
            text.append(span.text, Style(color="blue", underline=True, link=span.url))
        else:
            text.append(span.text, _SPAN_STYLES[span.kind])
    return text


def _list_item(marker: str, spans, style: str = "") -> Text:
    line = Text(f"{marker} ", style="blue")
    line.append_text(render_spans(spans, style))
    return line


def render_block(block: Block) -> RenderableType:
    if isinstance(block, Paragraph):
        return render_spans(block.spans)
    if isinstance(block, BulletList):
        return Group(*(_list_item(BULLET, item) for item in block.items))
    if isinstance(block, OrderedList):
        return Group(*(_list_item(f"{i}.", item) for i, item in enumerate(block.items, 1)))
    if isinstance(block, Checklist):
        return Group(
            *(
                _list_item(ICON_CHECKED, item.spans, "strike dim")
                if item.checked
                else _list_item(ICON_UNCHECKED, item.spans)
                for item in block.items
            )
        )
    if isinstance(block, Blockquote):
        quote = Text("▎ ", style="magenta")
        quote.append_text(render_spans(block.spans, "italic dim"))
        return quote
    if isinstance(block, Callout):
        return Panel(Text(f"{block.icon} ").append_text(render_spans(block.spans)), border_style="blue")
    if isinstance(block, Divider):
        return Rule(style="dim")
    if isinstance(block, CodeBlock):
        return Panel(Syntax(block.code, block.language, theme="monokai"), title=block.language, title_align="left")
    raise TypeError(f"Unknown block: {block!r}")


def render_blocks(blocks: Iterable[Block]) -> list[RenderableType]:
    return [render_block(b) for b in blocks]


def render_section(section: Section, blocks: Iterable[Block]) -> RenderableType:
    """Major sections get a rule heading; minor ones are indented beneath."""
    body = render_blocks(blocks)
    if section.level == 2:
        return Group(Rule(Text(section.title, style="bold"), align="left"), *body)
    heading = Text(section.title, style="bold magenta")
    return Padding(Group(heading, *body), (1, 0, 0, 2))


def render_message(message: Message, blocks: Iterable[Block]) -> RenderableType:
    style = "green" if message.role == "user" else "blue"
    return Panel(Group(*render_blocks(blocks)), title=ROLE_HEADINGS[message.role], title_align="left", border_style=style)
