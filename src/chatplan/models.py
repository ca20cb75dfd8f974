"""Data models for chats and plans."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from chatplan.constants import DEFAULT_STATUS, DIFFICULTIES, MILESTONE_STATUSES

Role = Literal["user", "ai"]


@dataclass(frozen=True)
class Section:
    """A heading plus the raw text beneath it. Level 2 is major, 3 is minor."""

    level: int
    title: str
    content: str = ""


@dataclass(frozen=True)
class Message:
    """One turn of a chat."""

    role: Role
    content: str


@dataclass(frozen=True)
class Milestone:
    title: str
    weeks: str
    status: str = DEFAULT_STATUS

    def __post_init__(self) -> None:
        if self.status not in MILESTONE_STATUSES:
            raise ValueError(f"Invalid milestone status: {self.status!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "weeks": self.weeks, "status": self.status}


@dataclass(frozen=True)
class ActionItem:
    task: str
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"task": self.task, "done": self.done}


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)


def _str_or_empty(value: Any) -> str:
    return "" if value is None else str(value)


def _flag(value: Any) -> bool:
    """Only a real boolean or the text "true" counts as set."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _tags(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(t) for t in value if t is not None)


@dataclass(frozen=True)
class ChatHeader:
    """Frontmatter of a chat document."""

    title: str
    date: datetime.date | str | None = None
    tags: tuple[str, ...] = ()
    tldr: str | None = None
    action_items: tuple[ActionItem, ...] = ()

    @classmethod
    def from_meta(cls, meta: dict) -> ChatHeader:
        """Build a header from decoded frontmatter, applying defaults."""
        items = tuple(
            ActionItem(task=_str_or_empty(item.get("task")), done=_flag(item.get("done")))
            for item in meta.get("action_items") or ()
            if isinstance(item, dict)
        )
        return cls(
            title=_str_or_empty(meta.get("title")),
            date=meta.get("date"),
            tags=_tags(meta.get("tags")),
            tldr=_str_or_none(meta.get("tldr")),
            action_items=items,
        )

    def to_fields(self) -> dict[str, Any]:
        """Ordered field mapping for the encoder."""
        return {
            "title": self.title,
            "date": self.date,
            "tags": list(self.tags),
            "tldr": self.tldr,
            "action_items": [item.to_dict() for item in self.action_items],
        }


@dataclass(frozen=True)
class PlanHeader:
    """Frontmatter of a plan document."""

    title: str
    date: datetime.date | str | None = None
    tags: tuple[str, ...] = ()
    tldr: str | None = None
    icon: str | None = None
    duration: str | None = None
    difficulty: str | None = None
    milestones: tuple[Milestone, ...] = ()

    def __post_init__(self) -> None:
        if self.difficulty is not None and self.difficulty not in DIFFICULTIES:
            raise ValueError(f"Invalid difficulty: {self.difficulty!r}")

    @classmethod
    def from_meta(cls, meta: dict) -> PlanHeader:
        """Build a header from decoded frontmatter, applying defaults."""
        milestones = tuple(
            Milestone(
                title=_str_or_empty(m.get("title")),
                weeks=_str_or_empty(m.get("weeks")),
                status=m.get("status") or DEFAULT_STATUS,
            )
            for m in meta.get("milestones") or ()
            if isinstance(m, dict)
        )
        return cls(
            title=_str_or_empty(meta.get("title")),
            date=meta.get("date"),
            tags=_tags(meta.get("tags")),
            tldr=_str_or_none(meta.get("tldr")),
            icon=_str_or_none(meta.get("icon")),
            duration=_str_or_none(meta.get("duration")),
            difficulty=meta.get("difficulty") or None,
            milestones=milestones,
        )

    def to_fields(self) -> dict[str, Any]:
        """Ordered field mapping for the encoder."""
        return {
            "title": self.title,
            "date": self.date,
            "tags": list(self.tags),
            "tldr": self.tldr,
            "icon": self.icon,
            "duration": self.duration,
            "difficulty": self.difficulty,
            "milestones": [m.to_dict() for m in self.milestones],
        }


Header = Union[ChatHeader, PlanHeader]


@dataclass(frozen=True)
class Document:
    """A chat or plan as stored on disk: header plus body text."""

    collection: str
    filename: str
    header: Header
    body: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_fields(self) -> dict[str, Any]:
        """Header fields followed by any keys the header model does not know."""
        fields = self.header.to_fields()
        for key, value in self.extra.items():
            fields.setdefault(key, value)
        return fields
