"""Handlers for 'chatplan chat' commands."""

import sys
from dataclasses import replace

from chatplan.cli._common import error, output_result, resolve_root
from chatplan.edits import toggle_action_item
from chatplan.models import ActionItem
from chatplan.store import StoreError, append_message, create_chat, load_document, save_document


def chat_new(args) -> int:
    """Create a new chat file."""
    try:
        path = create_chat(
            resolve_root(args.root),
            args.title,
            tags=args.tag or (),
            tldr=args.tldr,
            action_items=[ActionItem(task) for task in args.action or ()],
            on=args.date,
        )
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    output_result({"filename": path.name, "path": str(path)}, f"Created chat: {path.name}", args.json)
    return 0


def chat_add(args) -> int:
    """Append a message read from stdin to a chat."""
    content = sys.stdin.read()
    try:
        append_message(resolve_root(args.root), args.filename, args.role, content)
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    heading = "User" if args.role == "user" else "AI"
    output_result(
        {"filename": args.filename, "role": args.role},
        f"Appended {heading} message to {args.filename}",
        args.json,
    )
    return 0


def chat_done(args) -> int:
    """Toggle an action item's done flag (1-indexed)."""
    root = resolve_root(args.root)
    try:
        document = load_document(root, args.collection, args.filename)
        items = document.header.action_items
        if not 1 <= args.index <= len(items):
            error(f"No action item {args.index} (have {len(items)})", args.json)
        items = toggle_action_item(items, args.index - 1)
        save_document(root, replace(document, header=replace(document.header, action_items=items)))
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    item = items[args.index - 1]
    mark = "x" if item.done else " "
    output_result(
        {"filename": args.filename, "task": item.task, "done": item.done},
        f"[{mark}] {item.task}",
        args.json,
    )
    return 0
