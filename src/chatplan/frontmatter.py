"""Read and write the frontmatter header of chat and plan documents.

There are two decoders:

- ``read_frontmatter`` is the lightweight, line-based reader used for
  listings. It only sees top-level ``key: value`` lines and never raises.
- ``parse_front_matter`` is the authoritative reader used on edit paths.
  It hands the block to YAML so nested records and escapes survive.

``encode_frontmatter`` is the single writer used by every save.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from chatplan.constants import RECORD_FIELDS

logger = logging.getLogger(__name__)

_FRONT_MATTER_RE = re.compile(r"^---\n(.*?)\n---(?:\n|$)", re.DOTALL)
_QUOTED_RE = re.compile(r'^"(.*)"$')


def _match_header(text: str) -> re.Match | None:
    """Match the header block delimited by --- lines at the start of text."""
    if not text.startswith("---"):
        return None
    return _FRONT_MATTER_RE.match(text)


def read_frontmatter(text: str) -> dict[str, str]:
    """Parse top-level ``key: value`` lines of the header into a flat dict.

    Indented lines belong to nested blocks and are skipped. Surrounding
    double quotes are stripped; nothing inside them is unescaped.
    Returns {} when there is no header.
    """
    match = _match_header(text)
    if not match:
        return {}

    fields: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        if not line or line[0].isspace() or ":" not in line:
            continue
        key, _, value = line.partition(":")
        key = key.strip()
        if not key:
            continue
        fields[key] = _QUOTED_RE.sub(r"\1", value.strip())
    return fields


def read_frontmatter_file(path: Path | str) -> dict[str, str]:
    """Read a file and return its lightweight header fields."""
    return read_frontmatter(Path(path).read_text(encoding="utf-8"))


def parse_front_matter(text: str) -> tuple[str, dict]:
    """Extract the YAML header from text. Returns (remaining_text, meta).

    A missing, unclosed or unparsable header yields (text, {}).
    """
    match = _match_header(text)
    if not match:
        return text, {}

    remaining = text[match.end() :]

    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        logger.warning("unparsable frontmatter: %s", exc)
        return text, {}

    if not isinstance(meta, dict):
        return text, {}
    return remaining, meta


def serialize_value(value: Any) -> str:
    """Serialize a scalar for the header.

    Strings are double-quoted with backslashes and quotes escaped;
    booleans and numbers are written bare.
    """
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _encode_records(key: str, records) -> list[str]:
    lines = [f"{key}:"]
    for record in records:
        prefix = "  - "
        for name, value in record.items():
            if value is None:
                continue
            lines.append(f"{prefix}{name}: {serialize_value(value)}")
            prefix = "    "
    return lines


def encode_frontmatter(fields: Mapping[str, Any]) -> str:
    """Encode header fields in the given order, one field per line.

    Record lists (milestones, action items) become indented blocks, other
    lists become inline bracketed lists, and None values are omitted.
    """
    lines: list[str] = []
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if not value:
                lines.append(f"{key}: []")
            elif key in RECORD_FIELDS and all(isinstance(v, Mapping) for v in value):
                lines.extend(_encode_records(key, value))
            else:
                items = ", ".join(serialize_value(v) for v in value)
                lines.append(f"{key}: [{items}]")
        else:
            lines.append(f"{key}: {serialize_value(value)}")
    return "\n".join(lines)
