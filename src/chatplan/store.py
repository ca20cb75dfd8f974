"""Read and write chat and plan documents on disk.

Each document is one ``.mdx`` file inside its collection directory. Writes
replace the whole file in a single rename; there is no locking, so the last
writer wins.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from dataclasses import fields as dataclass_fields
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping

from chatplan.constants import CONTENT_DIR, EXTENSION, ROLE_HEADINGS, SAFE_FILENAME_RE
from chatplan.frontmatter import read_frontmatter_file
from chatplan.models import ActionItem, ChatHeader, Document, Message, Milestone, PlanHeader
from chatplan.writer import assemble_document, messages_to_body, split_document

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for document store failures."""


class InvalidFilename(StoreError, ValueError):
    pass


class EntryNotFound(StoreError, FileNotFoundError):
    pass


class EntryExists(StoreError, FileExistsError):
    pass


class Collection(str, Enum):
    CHATS = "chats"
    PLANS = "plans"

    @property
    def header_class(self) -> type[ChatHeader] | type[PlanHeader]:
        return ChatHeader if self is Collection.CHATS else PlanHeader


def is_safe_filename(filename: str) -> bool:
    """True if filename is a bare ``.mdx`` name with no path traversal."""
    return bool(SAFE_FILENAME_RE.match(filename)) and ".." not in filename


def slugify(text: str) -> str:
    """Convert text to a URL-friendly slug."""
    slug = text.lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug.strip("-")
    return slug or "untitled"


def _day(on: str | None) -> date:
    """Parse a YYYY-MM-DD string, defaulting to today's local date."""
    return date.fromisoformat(on) if on else date.today()


def collection_dir(root: Path | str, collection: Collection | str) -> Path:
    return Path(root) / CONTENT_DIR / Collection(collection).value


def _entry_path(root: Path | str, collection: Collection | str, filename: str) -> Path:
    """Validate filename and return its path. The file must exist."""
    if not filename or not is_safe_filename(filename):
        raise InvalidFilename(f"Invalid filename: {filename!r}")
    path = collection_dir(root, collection) / filename
    if not path.is_file():
        raise EntryNotFound(f"Not found: {Collection(collection).value}/{filename}")
    return path


def _write_text(path: Path, text: str) -> None:
    """Replace path's contents in one rename so a failed write leaves the old file."""
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def list_entries(root: Path | str, collection: Collection | str) -> list[dict[str, str]]:
    """List documents in a collection with their lightweight header fields.

    A missing collection directory lists as empty.
    """
    directory = collection_dir(root, collection)
    if not directory.is_dir():
        return []
    entries = []
    for path in sorted(directory.glob(f"*{EXTENSION}")):
        meta = read_frontmatter_file(path)
        entries.append(
            {
                "filename": path.name,
                "title": meta.get("title", ""),
                "date": meta.get("date", ""),
                "tldr": meta.get("tldr", ""),
            }
        )
    return entries


def read_entry(root: Path | str, collection: Collection | str, filename: str) -> str:
    """Return the raw text of a document."""
    return _entry_path(root, collection, filename).read_text(encoding="utf-8")


def _to_document(collection: Collection, filename: str, meta: dict, body: str) -> Document:
    header_cls = collection.header_class
    known = {f.name for f in dataclass_fields(header_cls)}
    return Document(
        collection=collection.value,
        filename=filename,
        header=header_cls.from_meta(meta),
        body=body,
        extra={k: v for k, v in meta.items() if k not in known},
    )


def load_document(root: Path | str, collection: Collection | str, filename: str) -> Document:
    """Read a document and decode its header with the authoritative decoder."""
    collection = Collection(collection)
    meta, body = split_document(read_entry(root, collection, filename))
    return _to_document(collection, filename, meta, body)


def write_document(
    root: Path | str,
    collection: Collection | str,
    filename: str,
    fields: Mapping[str, Any],
    body: str,
) -> Path:
    """Replace an existing document with the given header fields and body."""
    path = _entry_path(root, collection, filename)
    _write_text(path, assemble_document(fields, body))
    logger.info("wrote %s", path)
    return path


def save_document(root: Path | str, document: Document) -> Path:
    return write_document(root, document.collection, document.filename, document.to_fields(), document.body)


def _create(root: Path | str, collection: Collection, filename: str, fields: Mapping[str, Any], body: str) -> Path:
    if not is_safe_filename(filename):
        raise InvalidFilename(f"Invalid filename: {filename!r}")
    directory = collection_dir(root, collection)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    if path.exists():
        raise EntryExists(f"File already exists: {filename}")
    _write_text(path, assemble_document(fields, body))
    logger.info("created %s", path)
    return path


def create_chat(
    root: Path | str,
    title: str,
    tags: Iterable[str] = (),
    tldr: str | None = None,
    action_items: Iterable[ActionItem] = (),
    messages: Iterable[Message] = (),
    on: str | None = None,
) -> Path:
    """Create ``<date>-<slug>.mdx`` in the chats collection."""
    day = _day(on)
    header = ChatHeader(title=title, date=day, tags=tuple(tags), tldr=tldr, action_items=tuple(action_items))
    filename = f"{day.isoformat()}-{slugify(title)}{EXTENSION}"
    return _create(root, Collection.CHATS, filename, header.to_fields(), messages_to_body(messages))


def create_plan(
    root: Path | str,
    title: str,
    body: str = "",
    tags: Iterable[str] = (),
    tldr: str | None = None,
    icon: str | None = None,
    duration: str | None = None,
    difficulty: str | None = "intermediate",
    milestones: Iterable[Milestone] = (),
    on: str | None = None,
) -> Path:
    """Create ``<slug>.mdx`` in the plans collection."""
    header = PlanHeader(
        title=title,
        date=_day(on),
        tags=tuple(tags),
        tldr=tldr,
        icon=icon,
        duration=duration,
        difficulty=difficulty,
        milestones=tuple(milestones),
    )
    filename = f"{slugify(title)}{EXTENSION}"
    return _create(root, Collection.PLANS, filename, header.to_fields(), body)


def append_message(root: Path | str, filename: str, role: str, content: str) -> Path:
    """Append a ``## User`` or ``## AI`` message to the end of a chat.

    The existing header and body text are kept byte for byte.
    """
    if role not in ROLE_HEADINGS:
        raise ValueError(f"Invalid role: {role!r}")
    content = content.strip()
    if not content:
        raise ValueError("Empty message")
    path = _entry_path(root, Collection.CHATS, filename)
    text = path.read_text(encoding="utf-8").rstrip("\n")
    _write_text(path, f"{text}\n\n## {ROLE_HEADINGS[role]}\n\n{content}\n")
    logger.info("appended %s message to %s", role, path)
    return path


def update_fields(
    root: Path | str,
    collection: Collection | str,
    filename: str,
    changes: Mapping[str, Any],
) -> Document:
    """Merge changes into a document's header and rewrite the whole file.

    Values are validated through the collection's header model, so an
    unknown difficulty or milestone status raises ValueError.
    """
    collection = Collection(collection)
    meta, body = split_document(read_entry(root, collection, filename))
    meta.update(changes)
    document = _to_document(collection, filename, meta, body)
    save_document(root, document)
    return document


def delete_entry(root: Path | str, collection: Collection | str, filename: str) -> None:
    path = _entry_path(root, collection, filename)
    path.unlink()
    logger.info("deleted %s", path)
