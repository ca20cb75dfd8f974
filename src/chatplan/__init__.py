"""Chat logs and plans kept as markdown documents with a frontmatter header."""

from chatplan.blocks import parse_inline, to_blocks
from chatplan.frontmatter import encode_frontmatter, parse_front_matter, read_frontmatter
from chatplan.parser import split_messages, split_sections
from chatplan.store import is_safe_filename
from chatplan.writer import assemble_document, sections_to_body, toggle_checklist_line

__all__ = [
    "assemble_document",
    "encode_frontmatter",
    "is_safe_filename",
    "parse_front_matter",
    "parse_inline",
    "read_frontmatter",
    "sections_to_body",
    "split_messages",
    "split_sections",
    "to_blocks",
    "toggle_checklist_line",
]
