"""Serialize edited sections, messages and headers back to document text."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from chatplan.blocks import CHECKLIST_RE, fenced_lines
from chatplan.constants import ROLE_HEADINGS
from chatplan.frontmatter import encode_frontmatter, parse_front_matter
from chatplan.models import Message, Section

_MARKER_RE = re.compile(r"\[([ xX])\]")


def sections_to_body(intro: str, sections: Iterable[Section]) -> str:
    """Join intro and sections into body text, one blank line between parts.

    Section content is passed through as-is, never re-rendered.
    """
    parts: list[str] = []
    if intro.strip():
        parts.append(intro.strip())
    for section in sections:
        parts.append(f"{'#' * section.level} {section.title}")
        if section.content:
            parts.append(section.content)
    return "\n\n".join(parts)


def messages_to_body(messages: Iterable[Message]) -> str:
    """Join messages into ``## User`` / ``## AI`` headed chat body text."""
    return "\n\n".join(f"## {ROLE_HEADINGS[m.role]}\n\n{m.content.strip()}" for m in messages)


def _flip(line: str) -> str:
    def repl(match: re.Match) -> str:
        return "[ ]" if match.group(1) in "xX" else "[x]"

    return _MARKER_RE.sub(repl, line, count=1)


def toggle_checklist_line(content: str, line: str) -> str:
    """Flip the checkbox of every checklist line whose trimmed text equals line.

    Identical checklist lines all toggle together. Lines inside fenced code
    are left alone.
    """
    target = line.strip()
    skip = fenced_lines(content)
    lines = content.split("\n")
    for i, current in enumerate(lines):
        if i in skip or current.strip() != target:
            continue
        if CHECKLIST_RE.match(current.strip()):
            lines[i] = _flip(current)
    return "\n".join(lines)


def toggle_checklist_index(content: str, index: int) -> str:
    """Flip only the index-th checklist line (0-based, code excluded).

    Raises IndexError if content has fewer checklist lines.
    """
    skip = fenced_lines(content)
    lines = content.split("\n")
    seen = 0
    for i, current in enumerate(lines):
        if i in skip or not CHECKLIST_RE.match(current.strip()):
            continue
        if seen == index:
            lines[i] = _flip(current)
            return "\n".join(lines)
        seen += 1
    raise IndexError(f"No checklist item at index {index}")


def assemble_document(fields: Mapping[str, Any], body: str) -> str:
    """Build full document text from header fields and body."""
    return f"---\n{encode_frontmatter(fields)}\n---\n\n{body.strip()}\n"


def split_document(text: str) -> tuple[dict, str]:
    """Split stored document text into (meta, body) for editing."""
    remaining, meta = parse_front_matter(text)
    return meta, remaining.lstrip("\n")
