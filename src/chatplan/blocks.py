"""Turn section and message text into presentation blocks.

Both chats and plans render through ``to_blocks`` and ``parse_inline``.
Rendering works in two passes: fenced code is located first by a line
scan (the same scan the segmenters and checklist toggles use), then the
remaining lines are classified one at a time. Code is never re-read as
list, quote or divider syntax, whatever markup surrounds the fence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union


# --- Inline spans ---


@dataclass(frozen=True)
class Text:
    kind: ClassVar[str] = "text"
    text: str


@dataclass(frozen=True)
class Bold:
    kind: ClassVar[str] = "bold"
    text: str


@dataclass(frozen=True)
class Italic:
    kind: ClassVar[str] = "italic"
    text: str


@dataclass(frozen=True)
class InlineCode:
    kind: ClassVar[str] = "code"
    text: str


@dataclass(frozen=True)
class Link:
    kind: ClassVar[str] = "link"
    text: str
    url: str


Span = Union[Text, Bold, Italic, InlineCode, Link]

# Groups: (1) bold, (2) code, (3, 4) link text and url, (5) italic
_INLINE_RE = re.compile(r"\*\*(.+?)\*\*|`(.+?)`|\[(.+?)\]\((.+?)\)|\*(.+?)\*")


def parse_inline(text: str) -> list[Span]:
    """Split text into spans, left to right, without nesting.

    At each position the earliest match wins, preferring bold, then inline
    code, then link, then italic. Unmatched text passes through as Text.
    """
    spans: list[Span] = []
    last = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > last:
            spans.append(Text(text[last : match.start()]))
        bold, code, link_text, url, italic = match.groups()
        if bold is not None:
            spans.append(Bold(bold))
        elif code is not None:
            spans.append(InlineCode(code))
        elif link_text is not None:
            spans.append(Link(link_text, url))
        else:
            spans.append(Italic(italic))
        last = match.end()
    if last < len(text):
        spans.append(Text(text[last:]))
    return spans


# --- Blocks ---


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class BulletList:
    kind: ClassVar[str] = "bullet_list"
    items: tuple[tuple[Span, ...], ...]


@dataclass(frozen=True)
class OrderedList:
    kind: ClassVar[str] = "ordered_list"
    items: tuple[tuple[Span, ...], ...]


@dataclass(frozen=True)
class ChecklistItem:
    checked: bool
    text: str
    spans: tuple[Span, ...]
    line: str


@dataclass(frozen=True)
class Checklist:
    kind: ClassVar[str] = "checklist"
    items: tuple[ChecklistItem, ...]


@dataclass(frozen=True)
class Blockquote:
    kind: ClassVar[str] = "blockquote"
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class Callout:
    kind: ClassVar[str] = "callout"
    icon: str
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class Divider:
    kind: ClassVar[str] = "divider"


@dataclass(frozen=True)
class CodeBlock:
    kind: ClassVar[str] = "code"
    code: str
    language: str = "text"


Block = Union[Paragraph, BulletList, OrderedList, Checklist, Blockquote, Callout, Divider, CodeBlock]

CHECKLIST_RE = re.compile(r"^[-*]\s\[([ xX])\]\s(.+)")
_BULLET_RE = re.compile(r"^[-*]\s")
_ORDERED_RE = re.compile(r"^\d+\.\s")
_QUOTE_RE = re.compile(r"^>\s?")
_DIVIDER_RE = re.compile(r"^-{3,}$")
_FENCE = "```"
_CALLOUT_RE = re.compile(r"^([\U0001F300-\U0001FAD6\u2600-\u27BF\uFE00-\uFE0F\U0001F900-\U0001F9FF]\uFE0F?)\s*(.+)")


@dataclass(frozen=True)
class FencedSpan:
    """A fenced code block located by line range (end exclusive)."""

    start: int
    end: int
    code: str
    language: str


def find_fences(content: str) -> list[FencedSpan]:
    """Locate backtick-fenced code blocks in content by line.

    A trimmed line starting with ``` opens a fence (the rest of the line
    is the language tag) and the next trimmed line that is exactly ```
    closes it. An unclosed fence runs to the end of the content.
    """
    lines = content.split("\n")
    spans = []
    i = 0
    while i < len(lines):
        opening = lines[i].strip()
        if not opening.startswith(_FENCE):
            i += 1
            continue
        tag = opening[len(_FENCE) :].split()
        start = i
        i += 1
        while i < len(lines) and lines[i].strip() != _FENCE:
            i += 1
        end = min(i + 1, len(lines))
        spans.append(FencedSpan(start, end, "\n".join(lines[start + 1 : i]), tag[0] if tag else "text"))
        i = end
    return spans


def fenced_lines(content: str) -> set[int]:
    """Indexes of every line inside a fence, fence lines included."""
    lines: set[int] = set()
    for fence in find_fences(content):
        lines.update(range(fence.start, fence.end))
    return lines


class _Runs:
    """The single open list/checklist run while scanning lines."""

    def __init__(self, blocks: list[Block]) -> None:
        self.blocks = blocks
        self.kind: type | None = None
        self.items: list = []

    def push(self, kind: type, item) -> None:
        if self.kind is not kind:
            self.flush()
            self.kind = kind
        self.items.append(item)

    def flush(self) -> None:
        if self.kind is not None and self.items:
            self.blocks.append(self.kind(items=tuple(self.items)))
        self.kind = None
        self.items = []


def _classify_line(trimmed: str, runs: _Runs) -> None:
    blocks = runs.blocks

    match = CHECKLIST_RE.match(trimmed)
    if match:
        text = match.group(2)
        runs.push(Checklist, ChecklistItem(match.group(1) != " ", text, tuple(parse_inline(text)), trimmed))
        return

    if _BULLET_RE.match(trimmed):
        runs.push(BulletList, tuple(parse_inline(_BULLET_RE.sub("", trimmed, count=1))))
        return

    if _ORDERED_RE.match(trimmed):
        runs.push(OrderedList, tuple(parse_inline(_ORDERED_RE.sub("", trimmed, count=1))))
        return

    runs.flush()

    if trimmed.startswith(">"):
        quoted = _QUOTE_RE.sub("", trimmed, count=1)
        callout = _CALLOUT_RE.match(quoted)
        if callout:
            blocks.append(Callout(callout.group(1), tuple(parse_inline(callout.group(2)))))
        else:
            blocks.append(Blockquote(tuple(parse_inline(quoted))))
        return

    if _DIVIDER_RE.match(trimmed):
        blocks.append(Divider())
        return

    blocks.append(Paragraph(tuple(parse_inline(trimmed))))


def to_blocks(content: str) -> list[Block]:
    """Render raw section or message content into a list of blocks.

    Each non-blank plain line becomes its own paragraph. Consecutive list,
    numbered or checklist lines group into one block until a blank line,
    a line of another kind, a code block or the end of input.
    """
    if not content:
        return []

    blocks: list[Block] = []
    runs = _Runs(blocks)
    fences = {f.start: f for f in find_fences(content)}
    lines = content.split("\n")

    i = 0
    while i < len(lines):
        fence = fences.get(i)
        if fence is not None:
            runs.flush()
            blocks.append(CodeBlock(fence.code, fence.language))
            i = fence.end
            continue
        trimmed = lines[i].strip()
        i += 1
        if not trimmed:
            runs.flush()
            continue
        _classify_line(trimmed, runs)

    runs.flush()
    return blocks


def _to_plain(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_to_plain(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        data = {"type": value.kind} if hasattr(value, "kind") else {}
        for f in fields(value):
            data[f.name] = _to_plain(getattr(value, f.name))
        return data
    return value


def block_to_dict(block: Block) -> dict:
    """Convert a block (and its spans) into JSON-friendly data."""
    return _to_plain(block)
