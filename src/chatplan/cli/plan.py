"""Handlers for 'chatplan plan' commands."""

import sys
from dataclasses import replace

from chatplan.cli._common import error, output_result, resolve_root
from chatplan.edits import cycle_milestone_status, update_section
from chatplan.parser import split_sections
from chatplan.store import StoreError, create_plan, load_document, save_document
from chatplan.writer import sections_to_body, toggle_checklist_index, toggle_checklist_line


def plan_new(args) -> int:
    """Create a new plan file. The body is read from --body or stdin."""
    body = args.body if args.body is not None else sys.stdin.read()
    try:
        path = create_plan(
            resolve_root(args.root),
            args.title,
            body=body,
            tags=args.tag or (),
            tldr=args.tldr,
            icon=args.icon,
            duration=args.duration,
            difficulty=args.difficulty,
            on=args.date,
        )
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    output_result({"filename": path.name, "path": str(path)}, f"Created plan: {path.name}", args.json)
    return 0


def plan_toggle(args) -> int:
    """Toggle checklist items in a plan.

    With --index, only the n-th checklist item (1-indexed) of --section is
    flipped. Otherwise every line matching the given text flips.
    """
    root = resolve_root(args.root)
    try:
        document = load_document(root, args.collection, args.filename)
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    intro, sections = split_sections(document.body)

    if args.index is not None:
        if args.section is None or not 1 <= args.section <= len(sections):
            error(f"--index needs a valid --section (1-{len(sections)})", args.json)
        i = args.section - 1
        try:
            content = toggle_checklist_index(sections[i].content, args.index - 1)
        except IndexError as e:
            error(str(e), args.json)
        sections = update_section(sections, i, content=content)
    elif args.line:
        intro = toggle_checklist_line(intro, args.line)
        for i, section in enumerate(sections):
            sections = update_section(sections, i, content=toggle_checklist_line(section.content, args.line))
    else:
        error("Give a checklist line or --index", args.json)

    body = sections_to_body(intro, sections)
    if body == sections_to_body(*split_sections(document.body)):
        error("No matching checklist item", args.json)

    try:
        save_document(root, replace(document, body=body))
    except (StoreError, OSError) as e:
        error(str(e), args.json)

    output_result({"filename": args.filename, "body": body}, f"Updated {args.filename}", args.json)
    return 0


def plan_milestone(args) -> int:
    """Advance a milestone's status (1-indexed)."""
    root = resolve_root(args.root)
    try:
        document = load_document(root, args.collection, args.filename)
        milestones = document.header.milestones
        if not 1 <= args.index <= len(milestones):
            error(f"No milestone {args.index} (have {len(milestones)})", args.json)
        milestones = cycle_milestone_status(milestones, args.index - 1)
        save_document(root, replace(document, header=replace(document.header, milestones=milestones)))
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    milestone = milestones[args.index - 1]
    output_result(
        {"filename": args.filename, "title": milestone.title, "status": milestone.status},
        f"{milestone.title}: {milestone.status}",
        args.json,
    )
    return 0
