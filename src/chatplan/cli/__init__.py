"""CLI argument parser and dispatch for chatplan."""

import argparse

from chatplan.cli._common import default_root
from chatplan.cli.chat import chat_add, chat_done, chat_new
from chatplan.cli.entry import entry_delete, entry_fields, entry_get, entry_list, entry_set, entry_show, entry_tag
from chatplan.cli.plan import plan_milestone, plan_new, plan_toggle
from chatplan.constants import DIFFICULTIES
from chatplan.store import Collection


def _add_entry_verbs(verbs, common: argparse.ArgumentParser, label: str) -> None:
    """Verbs shared by chats and plans."""
    list_p = verbs.add_parser("list", help=f"List {label}s", parents=[common])
    list_p.set_defaults(func=entry_list)

    get_p = verbs.add_parser("get", help=f"Dump {label} markdown", parents=[common])
    get_p.add_argument("filename", help="The .mdx filename")
    get_p.set_defaults(func=entry_get)

    show_p = verbs.add_parser("show", help=f"Render a {label} in the terminal", parents=[common])
    show_p.add_argument("filename", help="The .mdx filename")
    show_p.set_defaults(func=entry_show)

    set_p = verbs.add_parser(
        "set",
        help=f'Replace a {label} from stdin JSON {{"frontmatter": ..., "body": ...}}',
        parents=[common],
    )
    set_p.add_argument("filename", help="The .mdx filename")
    set_p.set_defaults(func=entry_set)

    fields_p = verbs.add_parser("fields", help="Update frontmatter fields", parents=[common])
    fields_p.add_argument("filename", help="The .mdx filename")
    fields_p.add_argument("fields", help='JSON object, e.g. \'{"tldr": "New summary"}\'')
    fields_p.set_defaults(func=entry_fields)

    tag_p = verbs.add_parser("tag", help="Add or remove a tag", parents=[common])
    tag_p.add_argument("filename", help="The .mdx filename")
    tag_p.add_argument("tag", help="Tag text")
    tag_p.add_argument("--remove", action="store_true", help="Remove instead of add")
    tag_p.set_defaults(func=entry_tag)

    delete_p = verbs.add_parser("delete", help=f"Delete a {label}", parents=[common])
    delete_p.add_argument("filename", help="The .mdx filename")
    delete_p.set_defaults(func=entry_delete)


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", default=default_root(), help="Project root holding src/content (default: .)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Log file operations to stderr")

    parser = argparse.ArgumentParser(
        prog="chatplan",
        description="Keep chat logs and plans as markdown files",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- chat ---
    chat_p = nouns.add_parser("chat", help="Chat operations", parents=[common])
    chat_p.set_defaults(collection=Collection.CHATS)
    chat_verbs = chat_p.add_subparsers(dest="verb")
    _add_entry_verbs(chat_verbs, common, "chat")

    chat_new_p = chat_verbs.add_parser("new", help="Create a chat", parents=[common])
    chat_new_p.add_argument("title", help="Chat title")
    chat_new_p.add_argument("--tag", action="append", help="Tag (repeatable)")
    chat_new_p.add_argument("--tldr", help="One-line summary")
    chat_new_p.add_argument("--action", action="append", help="Action item (repeatable)")
    chat_new_p.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    chat_new_p.set_defaults(func=chat_new)

    chat_add_p = chat_verbs.add_parser("add", help="Append a message from stdin", parents=[common])
    chat_add_p.add_argument("filename", help="The .mdx filename")
    chat_add_p.add_argument("role", choices=["user", "ai"], help="Message role")
    chat_add_p.set_defaults(func=chat_add)

    chat_done_p = chat_verbs.add_parser("done", help="Toggle an action item", parents=[common])
    chat_done_p.add_argument("filename", help="The .mdx filename")
    chat_done_p.add_argument("index", type=int, help="Action item number (1-indexed)")
    chat_done_p.set_defaults(func=chat_done)

    # chat with no verb = list
    chat_p.set_defaults(func=entry_list)

    # --- plan ---
    plan_p = nouns.add_parser("plan", help="Plan operations", parents=[common])
    plan_p.set_defaults(collection=Collection.PLANS)
    plan_verbs = plan_p.add_subparsers(dest="verb")
    _add_entry_verbs(plan_verbs, common, "plan")

    plan_new_p = plan_verbs.add_parser("new", help="Create a plan (body from --body or stdin)", parents=[common])
    plan_new_p.add_argument("title", help="Plan title")
    plan_new_p.add_argument("--body", help="Markdown body (default: read stdin)")
    plan_new_p.add_argument("--tag", action="append", help="Tag (repeatable)")
    plan_new_p.add_argument("--tldr", help="One-line summary")
    plan_new_p.add_argument("--icon", help="Icon, e.g. an emoji")
    plan_new_p.add_argument("--duration", help='Duration, e.g. "3 months"')
    plan_new_p.add_argument("--difficulty", choices=DIFFICULTIES, default="intermediate", help="Difficulty level")
    plan_new_p.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    plan_new_p.set_defaults(func=plan_new)

    plan_toggle_p = plan_verbs.add_parser("toggle", help="Toggle checklist items", parents=[common])
    plan_toggle_p.add_argument("filename", help="The .mdx filename")
    plan_toggle_p.add_argument("line", nargs="?", help='Checklist line, e.g. "- [ ] Buy milk"')
    plan_toggle_p.add_argument("--section", type=int, help="Section number (1-indexed), with --index")
    plan_toggle_p.add_argument("--index", type=int, help="Checklist item number within the section (1-indexed)")
    plan_toggle_p.set_defaults(func=plan_toggle)

    plan_ms_p = plan_verbs.add_parser("milestone", help="Advance a milestone's status", parents=[common])
    plan_ms_p.add_argument("filename", help="The .mdx filename")
    plan_ms_p.add_argument("index", type=int, help="Milestone number (1-indexed)")
    plan_ms_p.set_defaults(func=plan_milestone)

    # plan with no verb = list
    plan_p.set_defaults(func=entry_list)

    return parser
