"""Handlers shared by 'chatplan chat' and 'chatplan plan' commands."""

import json
import sys
from dataclasses import asdict, replace

from rich.console import Console
from rich.text import Text

from chatplan.blocks import block_to_dict, to_blocks
from chatplan.cli._common import document_to_dict, error, output_json, output_result, resolve_root
from chatplan.edits import add_tag, remove_tag
from chatplan.parser import render_messages, render_sections, split_sections
from chatplan.render import render_blocks, render_message, render_section
from chatplan.store import (
    Collection,
    StoreError,
    delete_entry,
    list_entries,
    load_document,
    read_entry,
    save_document,
    update_fields,
    write_document,
)


def entry_list(args) -> int:
    """List documents in a collection."""
    entries = list_entries(resolve_root(args.root), args.collection)

    if args.json:
        output_json(entries)
        return 0

    if not entries:
        print("(none)")
    for i, entry in enumerate(entries, 1):
        print(f"{i:>3}. {entry['filename']}")
        print(f"     {entry['title'] or 'Untitled'} · {entry['date'] or '?'}")
        if entry["tldr"]:
            print(f"     {entry['tldr']}")
    return 0


def entry_get(args) -> int:
    """Dump a document's raw text, or its decoded parts with --json."""
    root = resolve_root(args.root)
    try:
        if args.json:
            output_json(document_to_dict(load_document(root, args.collection, args.filename)))
        else:
            print(read_entry(root, args.collection, args.filename), end="")
    except (StoreError, ValueError) as e:
        error(str(e), args.json)
    return 0


def entry_show(args) -> int:
    """Render a document's body as blocks in the terminal."""
    try:
        document = load_document(resolve_root(args.root), args.collection, args.filename)
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    if args.collection == Collection.CHATS:
        chunks = list(render_messages(document.body))
        intro_blocks = []
    else:
        intro, _ = split_sections(document.body)
        intro_blocks = to_blocks(intro)
        chunks = list(render_sections(document.body))

    if args.json:
        output_json(
            {
                "title": document.header.title,
                "intro": [block_to_dict(b) for b in intro_blocks],
                "chunks": [
                    {
                        **{k: v for k, v in asdict(chunk).items() if k != "content"},
                        "blocks": [block_to_dict(b) for b in blocks],
                    }
                    for chunk, blocks in chunks
                ],
            }
        )
        return 0

    console = Console()
    console.print(Text(document.header.title, style="bold"))
    for renderable in render_blocks(intro_blocks):
        console.print(renderable)
    for chunk, blocks in chunks:
        if args.collection == Collection.CHATS:
            console.print(render_message(chunk, blocks))
        else:
            console.print(render_section(chunk, blocks))
    return 0


def entry_set(args) -> int:
    """Replace a document from a JSON object on stdin.

    Expects {"frontmatter": {...}, "body": "..."}; the whole file is rewritten.
    """
    try:
        payload = json.loads(sys.stdin.read())
    except json.JSONDecodeError as e:
        error(f"Invalid JSON: {e}", args.json)

    if not isinstance(payload, dict) or not isinstance(payload.get("frontmatter"), dict):
        error("Missing required field: frontmatter", args.json)
    if not isinstance(payload.get("body"), str):
        error("Missing required field: body", args.json)

    try:
        path = write_document(
            resolve_root(args.root), args.collection, args.filename, payload["frontmatter"], payload["body"]
        )
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    output_result({"ok": True, "path": str(path)}, f"Updated {args.filename}", args.json)
    return 0


def entry_fields(args) -> int:
    """Merge a JSON object of frontmatter fields into a document."""
    try:
        changes = json.loads(args.fields)
    except json.JSONDecodeError as e:
        error(f"Invalid JSON: {e}", args.json)
    if not isinstance(changes, dict):
        error("Fields must be a JSON object", args.json)

    try:
        update_fields(resolve_root(args.root), args.collection, args.filename, changes)
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    keys = ", ".join(changes)
    output_result(
        {"filename": args.filename, "updated": list(changes)},
        f"Updated fields [{keys}] in {args.collection.value}/{args.filename}",
        args.json,
    )
    return 0


def entry_delete(args) -> int:
    """Delete a document."""
    try:
        delete_entry(resolve_root(args.root), args.collection, args.filename)
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    output_result(
        {"filename": args.filename, "deleted": True},
        f"Deleted: {args.collection.value}/{args.filename}",
        args.json,
    )
    return 0


def entry_tag(args) -> int:
    """Add or remove a tag."""
    root = resolve_root(args.root)
    try:
        document = load_document(root, args.collection, args.filename)
        header = document.header
        tags = remove_tag(header.tags, args.tag) if args.remove else add_tag(header.tags, args.tag)
        save_document(root, replace(document, header=replace(header, tags=tags)))
    except (StoreError, ValueError) as e:
        error(str(e), args.json)

    output_result(
        {"filename": args.filename, "tags": list(tags)},
        f"Tags: {', '.join(tags) or '(none)'}",
        args.json,
    )
    return 0
