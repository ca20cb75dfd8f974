"""Shared fixtures for CLI tests."""

import pytest

from chatplan.models import ActionItem, Message, Milestone
from chatplan.store import create_chat, create_plan

PLAN_BODY = """Getting started with Go.

## Week 1

- [ ] Install Go
- [x] Read the tour

## Week 2

- [ ] Install Go
- [ ] Write a CLI
"""


@pytest.fixture
def content_root(tmp_path):
    """A project root with one chat and one plan."""
    create_chat(
        tmp_path,
        "Mentor Call",
        tags=["gsoc"],
        tldr="Proposal feedback",
        action_items=[ActionItem("Send draft"), ActionItem("Book call", done=True)],
        messages=[Message("user", "Is my proposal ok?"), Message("ai", "Mostly, tighten the timeline.")],
        on="2026-02-25",
    )
    create_plan(
        tmp_path,
        "Learn Go",
        body=PLAN_BODY,
        tags=["go"],
        tldr="Twelve weeks of Go",
        milestones=[Milestone("Basics", "Weeks 1-4"), Milestone("Projects", "Weeks 5-8", "in-progress")],
        on="2026-03-01",
    )
    return tmp_path
