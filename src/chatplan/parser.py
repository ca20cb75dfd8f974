"""Split document bodies into sections (plans) or messages (chats)."""

from __future__ import annotations

import re
from typing import Iterator, Protocol

from chatplan.blocks import Block, fenced_lines, to_blocks
from chatplan.models import Message, Section

_SECTION_HEADING = re.compile(r"^(#{2,3}) (.+)")
_MESSAGE_HEADING = "## "


class SplitStrategy(Protocol):
    """Turns a body into ordered content chunks for the block renderer."""

    def split(self, body: str) -> list: ...


class SectionSplitter:
    """Split on ``##`` and ``###`` heading lines.

    Text before the first heading is kept as the intro. Headings inside
    fenced code are content, not boundaries.
    """

    def split(self, body: str) -> list[Section]:
        return self.split_with_intro(body)[1]

    def split_with_intro(self, body: str) -> tuple[str, list[Section]]:
        sections: list[Section] = []
        intro_lines: list[str] = []
        current: tuple[int, str] | None = None
        current_lines: list[str] = []
        code = fenced_lines(body)

        for i, line in enumerate(body.split("\n")):
            match = None if i in code else _SECTION_HEADING.match(line)
            if match:
                if current is not None:
                    sections.append(Section(current[0], current[1], "\n".join(current_lines).strip()))
                current = (len(match.group(1)), match.group(2).strip())
                current_lines = []
                continue
            if current is not None:
                current_lines.append(line)
            else:
                intro_lines.append(line)

        if current is not None:
            sections.append(Section(current[0], current[1], "\n".join(current_lines).strip()))

        return "\n".join(intro_lines).strip(), sections


class MessageSplitter:
    """Split on ``## User`` / ``## AI`` heading lines.

    Any other ``##`` heading closes the previous message and opens a chunk
    that is dropped, as is text before the first heading.
    """

    def split(self, body: str) -> list[Message]:
        messages: list[Message] = []
        chunks: list[list[str]] = []
        code = fenced_lines(body)

        for i, line in enumerate(body.split("\n")):
            if i not in code and line.startswith(_MESSAGE_HEADING):
                chunks.append([line[len(_MESSAGE_HEADING) :]])
            elif chunks:
                chunks[-1].append(line)

        for label, *rest in chunks:
            role = label.strip().lower()
            content = "\n".join(rest).strip()
            if role in ("user", "ai") and content:
                messages.append(Message(role=role, content=content))
        return messages


def split_sections(body: str) -> tuple[str, list[Section]]:
    """Return (intro, sections) for a plan body."""
    return SectionSplitter().split_with_intro(body)


def split_messages(body: str) -> list[Message]:
    """Return the user/AI messages of a chat body."""
    return MessageSplitter().split(body)


def render_chunks(body: str, strategy: SplitStrategy) -> Iterator[tuple[Section | Message, list[Block]]]:
    """Split body with strategy and render each chunk with the shared renderer."""
    for chunk in strategy.split(body):
        yield chunk, to_blocks(chunk.content)


def render_sections(body: str) -> Iterator[tuple[Section, list[Block]]]:
    return render_chunks(body, SectionSplitter())


def render_messages(body: str) -> Iterator[tuple[Message, list[Block]]]:
    return render_chunks(body, MessageSplitter())
