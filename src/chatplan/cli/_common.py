"""Shared helpers for CLI command handlers."""

import json
import logging
import os
import sys
from pathlib import Path

from chatplan.constants import ROOT_ENV_VAR
from chatplan.models import Document


def default_root() -> str:
    """Content root from the environment, or the current directory."""
    return os.environ.get(ROOT_ENV_VAR, ".")


def resolve_root(root: str) -> Path:
    return Path(root).resolve()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
    )


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def document_to_dict(document: Document) -> dict:
    """JSON-friendly view of a document's header and body."""
    return {
        "collection": document.collection,
        "filename": document.filename,
        "frontmatter": document.to_fields(),
        "body": document.body,
    }
