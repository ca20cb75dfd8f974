"""Tests for 'chatplan plan' commands."""

import json
from argparse import Namespace
from io import StringIO

import pytest

from chatplan.cli.plan import plan_milestone, plan_new, plan_toggle
from chatplan.parser import split_sections
from chatplan.store import Collection, load_document

PLAN = "learn-go.mdx"


def _toggle_args(root, line=None, section=None, index=None, json=False):
    return Namespace(
        root=str(root),
        json=json,
        collection=Collection.PLANS,
        filename=PLAN,
        line=line,
        section=section,
        index=index,
    )


def _sections(root):
    return split_sections(load_document(root, Collection.PLANS, PLAN).body)[1]


def test_plan_new_from_stdin(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", StringIO("## Goals\n\n- [ ] Ship it\n"))
    args = Namespace(
        root=str(tmp_path),
        json=False,
        title="Side Project",
        body=None,
        tag=["fun"],
        tldr=None,
        icon="🚀",
        duration="2 weeks",
        difficulty="beginner",
        date="2026-05-01",
    )
    assert plan_new(args) == 0

    assert "Created plan: side-project.mdx" in capsys.readouterr().out
    doc = load_document(tmp_path, Collection.PLANS, "side-project.mdx")
    assert doc.header.difficulty == "beginner"
    assert doc.header.duration == "2 weeks"
    assert doc.body == "## Goals\n\n- [ ] Ship it\n"


def test_plan_new_body_option(tmp_path, capsys):
    args = Namespace(
        root=str(tmp_path),
        json=True,
        title="Tiny",
        body="Just an intro",
        tag=None,
        tldr=None,
        icon=None,
        duration=None,
        difficulty="intermediate",
        date=None,
    )
    assert plan_new(args) == 0

    assert json.loads(capsys.readouterr().out)["filename"] == "tiny.mdx"


def test_plan_toggle_line_flips_every_match(content_root, capsys):
    assert plan_toggle(_toggle_args(content_root, line="- [ ] Install Go")) == 0

    assert f"Updated {PLAN}" in capsys.readouterr().out
    sections = _sections(content_root)
    assert "- [x] Install Go" in sections[0].content
    assert "- [x] Install Go" in sections[1].content
    assert "- [ ] Write a CLI" in sections[1].content


def test_plan_toggle_line_unchecks(content_root):
    assert plan_toggle(_toggle_args(content_root, line="- [x] Read the tour")) == 0
    assert "- [ ] Read the tour" in _sections(content_root)[0].content


def test_plan_toggle_index(content_root):
    assert plan_toggle(_toggle_args(content_root, section=2, index=1)) == 0

    sections = _sections(content_root)
    assert "- [ ] Install Go" in sections[0].content
    assert sections[1].content == "- [x] Install Go\n- [ ] Write a CLI"


def test_plan_toggle_no_match(content_root, capsys):
    with pytest.raises(SystemExit, match="1"):
        plan_toggle(_toggle_args(content_root, line="- [ ] Learn Rust"))
    assert "No matching checklist item" in capsys.readouterr().err


def test_plan_toggle_index_needs_section(content_root):
    with pytest.raises(SystemExit, match="1"):
        plan_toggle(_toggle_args(content_root, index=1))


def test_plan_toggle_index_out_of_range(content_root):
    with pytest.raises(SystemExit, match="1"):
        plan_toggle(_toggle_args(content_root, section=1, index=5))


def test_plan_toggle_nothing_given(content_root):
    with pytest.raises(SystemExit, match="1"):
        plan_toggle(_toggle_args(content_root))


def test_plan_toggle_keeps_header(content_root):
    plan_toggle(_toggle_args(content_root, line="- [ ] Write a CLI"))
    header = load_document(content_root, Collection.PLANS, PLAN).header
    assert header.tags == ("go",)
    assert [m.status for m in header.milestones] == ["not-started", "in-progress"]


def test_plan_milestone(content_root, capsys):
    args = Namespace(root=str(content_root), json=False, collection=Collection.PLANS, filename=PLAN, index=2)
    assert plan_milestone(args) == 0

    assert "Projects: complete" in capsys.readouterr().out
    milestones = load_document(content_root, Collection.PLANS, PLAN).header.milestones
    assert milestones[1].status == "complete"


def test_plan_milestone_wraps(content_root, capsys):
    args = Namespace(root=str(content_root), json=True, collection=Collection.PLANS, filename=PLAN, index=2)
    plan_milestone(args)
    plan_milestone(args)

    outputs = capsys.readouterr().out
    assert '"status": "not-started"' in outputs


def test_plan_milestone_out_of_range(content_root):
    args = Namespace(root=str(content_root), json=False, collection=Collection.PLANS, filename=PLAN, index=0)
    with pytest.raises(SystemExit, match="1"):
        plan_milestone(args)
