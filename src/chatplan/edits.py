"""Pure edit operations for chats and plans.

Every function returns new tuples or records; inputs are never mutated.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from chatplan.constants import (
    MILESTONE_STATUSES,
    NEW_MILESTONE_TITLE,
    NEW_MILESTONE_WEEKS,
    NEW_SECTION_TITLES,
)
from chatplan.models import ActionItem, Message, Milestone, Section


def update_section(sections: Sequence[Section], index: int, **changes) -> tuple[Section, ...]:
    """Replace fields (title, level, content) of the section at index."""
    return tuple(replace(s, **changes) if i == index else s for i, s in enumerate(sections))


def add_section(sections: Sequence[Section], level: int = 2, title: str | None = None) -> tuple[Section, ...]:
    """Append an empty section with a default title for its level."""
    if level not in NEW_SECTION_TITLES:
        raise ValueError(f"Invalid section level: {level}")
    return (*sections, Section(level, title or NEW_SECTION_TITLES[level], ""))


def remove_section(sections: Sequence[Section], index: int) -> tuple[Section, ...]:
    return tuple(s for i, s in enumerate(sections) if i != index)


def move_section(sections: Sequence[Section], index: int, position: int) -> tuple[Section, ...]:
    """Move the section at index to position, clamped to the list bounds."""
    items = list(sections)
    section = items.pop(index)
    items.insert(max(0, min(position, len(items))), section)
    return tuple(items)


def add_tag(tags: Sequence[str], tag: str) -> tuple[str, ...]:
    """Append a trimmed tag unless it is blank or already present."""
    tag = tag.strip()
    if not tag or tag in tags:
        return tuple(tags)
    return (*tags, tag)


def remove_tag(tags: Sequence[str], tag: str) -> tuple[str, ...]:
    return tuple(t for t in tags if t != tag)


def next_status(status: str) -> str:
    """not-started -> in-progress -> complete -> not-started."""
    index = MILESTONE_STATUSES.index(status)
    return MILESTONE_STATUSES[(index + 1) % len(MILESTONE_STATUSES)]


def cycle_milestone_status(milestones: Sequence[Milestone], index: int) -> tuple[Milestone, ...]:
    return tuple(
        replace(m, status=next_status(m.status)) if i == index else m for i, m in enumerate(milestones)
    )


def add_milestone(
    milestones: Sequence[Milestone],
    title: str = NEW_MILESTONE_TITLE,
    weeks: str = NEW_MILESTONE_WEEKS,
) -> tuple[Milestone, ...]:
    return (*milestones, Milestone(title, weeks))


def update_milestone(milestones: Sequence[Milestone], index: int, **changes) -> tuple[Milestone, ...]:
    return tuple(replace(m, **changes) if i == index else m for i, m in enumerate(milestones))


def remove_milestone(milestones: Sequence[Milestone], index: int) -> tuple[Milestone, ...]:
    return tuple(m for i, m in enumerate(milestones) if i != index)


def toggle_action_item(items: Sequence[ActionItem], index: int) -> tuple[ActionItem, ...]:
    return tuple(replace(a, done=not a.done) if i == index else a for i, a in enumerate(items))


def append_message(messages: Sequence[Message], role: str, content: str) -> tuple[Message, ...]:
    """Append a message. Blank content is rejected."""
    if role not in ("user", "ai"):
        raise ValueError(f"Invalid role: {role!r}")
    if not content.strip():
        raise ValueError("Empty message")
    return (*messages, Message(role, content.strip()))
